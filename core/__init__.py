"""core package initialization.

Map language pipeline (lexer → map_parser → validate → directives →
loader), the World, tuning, and the pygame app shell.
"""

__all__ = ["lexer", "map_parser", "validate", "directives", "world",
           "loader", "tuning", "app", "scene", "constants"]
