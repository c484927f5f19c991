"""Container format core: header, errors and serialization."""
