from .grid import grid_class
from .fields import fields_class
from .input import input_class
from .master import master_class
from .turbine_model import turbine_model_class, read_turbine_params
from .wind_farm import wind_farm_class, read_layout_file

# Optionally expose key classes/functions directly
__all__ = [
    "grid_class",
    "fields_class",
    "input_class",
    "master_class",
    "turbine_model_class",
    "read_turbine_params",
    "wind_farm_class",
    "read_layout_file",
]
