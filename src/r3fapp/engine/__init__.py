from r3fapp.engine.formatter import Formatter, NullFormatter, PrettierFormatter
from r3fapp.engine.pipeline import MigrationPipeline, MigrationResult, migrate

__all__ = [
    "Formatter",
    "NullFormatter",
    "PrettierFormatter",
    "MigrationPipeline",
    "MigrationResult",
    "migrate",
]
