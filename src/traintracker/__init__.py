"""
Synthetic price tracker for train routes and tech products.
In-memory price engine with a clean separation of concerns.

Modules:
- engine: Price generation, bounded series storage, summaries, scheduling
- shared: Common models and enums
- infrastructure: Config, logging, clock
"""

__version__ = "0.1.0"
