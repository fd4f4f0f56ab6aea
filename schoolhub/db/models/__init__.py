# Models package (re-export feature modules for stable imports)
from .schools.school import School

__all__ = [
    "School",
]
