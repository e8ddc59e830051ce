"""Domain-Driven Design domains for aria-view.

Bounded contexts:
- shared: element protocols, JS-style coercions and the error hierarchy
- codec: typed value <-> attribute string conversion
- registry: property names bound to codecs
- view: typed views materialized over elements
"""
