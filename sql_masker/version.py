"""Version information."""

__version__ = "1.0.0"
__version_info__ = (1, 0, 0)

# Version history
CHANGELOG = """
# Changelog

## v1.0.0

**Alias-aware masking**

- Rename graph extraction for projections and FROM sub-queries
- Transitive alias closure
- MASK / TRUNCATE / REPLACE / GENERALIZE / ADD_NOISE rules
- Regex-driven sensitive column scanning
- DB-API driver and in-memory driver
- `sql-masker` CLI

### Known Limitations

- JOIN sub-queries, computed expressions and wildcards are not traced
"""
