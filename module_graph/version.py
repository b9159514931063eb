"""Version information."""

__version__ = "1.0.0"
__version_info__ = (1, 0, 0)

# Version history
CHANGELOG = """
# Changelog

## v1.0.0

**Dependency graph**

- Gradle module metadata parsing
- Graph built from common variants of one organization group
- Transitive dependency and reverse-dependency queries with cycle guard
- full.txt / filtered.txt / deps.txt reports

**CLI**

- --fetch from a Maven repository with local cache
- --filter-target, --group, --qualified-ids
- --summary table with graph statistics

### Known Limitations

- Module names are used as node ids by default; modules with the same name
  in different groups collide (use --qualified-ids)
- No version constraint solving
"""
