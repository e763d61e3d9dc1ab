"""Built-in question catalogs shipped as YAML."""
