# Schemas package (re-export feature modules for stable imports)
from .schools.school import *
from .common.common import *
