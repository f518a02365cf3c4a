"""Shared fixtures for the actuator disk tests."""

import matplotlib

matplotlib.use("Agg")

import numpy as np
import pytest

from actuator_disk_model import fields_class, grid_class


@pytest.fixture
def grid():
    """1 km x 1 km x 200 m box, 20 m horizontal and 10 m vertical cells."""
    return grid_class(Lx=1000., Ly=1000., Lz=200., Nx=50, Ny=50, Nz=20)


@pytest.fixture
def fields(grid):
    f = fields_class(grid)
    f.set_uniform(u=8.)
    return f


@pytest.fixture
def turbine_params():
    return dict(D=100., hhub=95., Ct=0.75, Cp=0.45, tsr=8.)
