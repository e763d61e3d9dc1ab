"""Catalog Registry for managing ISO question catalogs."""

from importlib import resources
from pathlib import Path
from typing import Any

import yaml

from isoaudit.models import (
    AuditTemplate,
    DefaultGuidance,
    EvidenceGuidance,
    IsoSection,
    IsoStandard,
    NonConformanceExample,
    NonConformanceExamples,
    Question,
    QuestionCatalog,
    RiskLevel,
)
from isoaudit.tracing import AuditEventType, log_audit_event

BUILTIN_CATALOGS = ("iso9001.yaml", "iso45001.yaml")


class CatalogRegistry:
    """Registry for question catalogs.

    Manages loading, storing, and retrieving catalogs keyed by standard.
    Supports loading from YAML files or programmatic registration.
    """

    def __init__(self):
        self._catalogs: dict[str, QuestionCatalog] = {}

    def register(self, catalog: QuestionCatalog) -> None:
        """Register a question catalog.

        Args:
            catalog: The catalog to register.

        Raises:
            ValueError: If a catalog for the same standard already exists.
        """
        key = IsoStandard(catalog.id).value
        if key in self._catalogs:
            raise ValueError(f"Catalog '{key}' already registered")
        self._catalogs[key] = catalog

    def get(self, standard: str) -> QuestionCatalog | None:
        """Get a catalog by standard id (e.g., "ISO9001")."""
        return self._catalogs.get(str(getattr(standard, "value", standard)))

    def get_or_raise(self, standard: str) -> QuestionCatalog:
        """Get a catalog by standard id, raising if not found.

        Raises:
            KeyError: If catalog not found.
        """
        catalog = self.get(standard)
        if catalog is None:
            raise KeyError(f"Catalog '{standard}' not found")
        return catalog

    def list_all(self) -> list[QuestionCatalog]:
        """List all registered catalogs."""
        return list(self._catalogs.values())

    def list_ids(self) -> list[str]:
        """List all registered standard ids."""
        return list(self._catalogs.keys())

    def unregister(self, standard: str) -> bool:
        """Remove a catalog from the registry.

        Returns:
            True if removed, False if not found.
        """
        if standard in self._catalogs:
            del self._catalogs[standard]
            return True
        return False

    def clear(self) -> None:
        """Clear all registered catalogs."""
        self._catalogs.clear()

    def load_from_yaml(self, path: str | Path) -> QuestionCatalog:
        """Load a catalog definition from a YAML file.

        Args:
            path: Path to the YAML file.

        Returns:
            The loaded catalog.
        """
        path = Path(path)
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)

        catalog = self.parse_catalog(data)
        self.register(catalog)
        log_audit_event(
            AuditEventType.CATALOG_LOADED,
            f"Loaded {catalog.name} from {path.name}",
            questions=len(catalog.questions),
            sections=len(catalog.sections),
        )
        return catalog

    def load_from_directory(self, directory: str | Path) -> list[QuestionCatalog]:
        """Load all catalog definitions from a directory."""
        directory = Path(directory)
        loaded = []
        for yaml_file in sorted(directory.glob("*.yaml")):
            loaded.append(self.load_from_yaml(yaml_file))
        for yml_file in sorted(directory.glob("*.yml")):
            loaded.append(self.load_from_yaml(yml_file))
        return loaded

    def load_builtin(self) -> list[QuestionCatalog]:
        """Load the catalogs shipped with the package, skipping registered ones."""
        loaded = []
        package_files = resources.files("isoaudit.catalogs")
        for name in BUILTIN_CATALOGS:
            with resources.as_file(package_files / name) as path:
                data = yaml.safe_load(path.read_text(encoding="utf-8"))
            if data["id"] in self._catalogs:
                continue
            catalog = self.parse_catalog(data)
            self.register(catalog)
            loaded.append(catalog)
        return loaded

    def parse_catalog(self, data: dict[str, Any]) -> QuestionCatalog:
        """Parse catalog data from dictionary."""
        standard = IsoStandard(data["id"])
        default_guidance = None
        if data.get("default_guidance"):
            default_guidance = self._parse_default_guidance(data["default_guidance"])

        questions = []
        for q_data in data.get("questions", []):
            question = self._parse_question(q_data, standard)
            if default_guidance is not None:
                question = default_guidance.apply(question)
            questions.append(question)

        sections = [
            IsoSection(
                number=str(s_data["number"]),
                title=s_data["title"],
                clauses=[str(c) for c in s_data.get("clauses", [])],
                description=s_data.get("description", ""),
                risk_level=RiskLevel(s_data.get("risk_level", "medium")),
                industry_relevance=s_data.get("industry_relevance", ""),
            )
            for s_data in data.get("sections", [])
        ]

        templates = [
            AuditTemplate(
                id=t_data["id"],
                name=t_data["name"],
                sections=t_data.get("sections", []),
                description=t_data.get("description", ""),
                recommended_for=t_data.get("recommended_for", []),
            )
            for t_data in data.get("templates", [])
        ]

        return QuestionCatalog(
            id=standard,
            name=data["name"],
            version=str(data.get("version", "1.0")),
            questions=questions,
            sections=sections,
            templates=templates,
            full_name=data.get("full_name", ""),
            description=data.get("description", ""),
            default_guidance=default_guidance,
            metadata=data.get("metadata", {}),
        )

    def _parse_question(self, data: dict[str, Any], standard: IsoStandard) -> Question:
        evidence = data.get("evidence_guidance")
        examples = data.get("non_conformance_examples")
        return Question(
            id=data["id"],
            clause=str(data["clause"]),
            text=data["text"],
            category=data.get("category", ""),
            risk_level=RiskLevel(data.get("risk_level", "medium")),
            iso_standard=IsoStandard(data.get("iso_standard", standard.value)),
            is_parent=data.get("is_parent", False),
            parent_id=data.get("parent_id"),
            industry_context=data.get("industry_context"),
            evidence_guidance=EvidenceGuidance(**evidence) if evidence else None,
            non_conformance_examples=self._parse_examples(examples) if examples else None,
            audit_tips=data.get("audit_tips", []),
            metadata=data.get("metadata", {}),
        )

    def _parse_examples(self, data: dict[str, Any]) -> NonConformanceExamples:
        return NonConformanceExamples(
            minor=NonConformanceExample(**data["minor"]),
            major=NonConformanceExample(**data["major"]),
            critical=NonConformanceExample(**data["critical"]),
        )

    def _parse_default_guidance(self, data: dict[str, Any]) -> DefaultGuidance:
        evidence = data.get("evidence_guidance")
        examples = data.get("non_conformance_examples")
        return DefaultGuidance(
            evidence_guidance=EvidenceGuidance(**evidence) if evidence else None,
            non_conformance_examples=self._parse_examples(examples) if examples else None,
            audit_tips=data.get("audit_tips", []),
        )

    def __len__(self) -> int:
        return len(self._catalogs)

    def __contains__(self, standard: str) -> bool:
        return standard in self._catalogs


# Global registry instance
_default_registry: CatalogRegistry | None = None


def get_catalog_registry() -> CatalogRegistry:
    """Get the default catalog registry, preloaded with built-in catalogs."""
    global _default_registry
    if _default_registry is None:
        from config.settings import settings

        _default_registry = CatalogRegistry()
        _default_registry.load_builtin()
        if settings.catalog_dir:
            _default_registry.load_from_directory(settings.catalog_dir)
    return _default_registry
