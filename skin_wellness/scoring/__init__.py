"""
scoring/ - Severity scale, category registry and score aggregation

Modules:
    utils.py              - Decimal utilities
    severity_scale.py     - 0-10 level -> band label and colour
    category_registry.py  - Ordered, immutable category list
    parameter_catalog.py  - Per-parameter score options and templates
    aggregator.py         - Parameter scores -> category visibility level
"""
