#!/usr/bin/env python
# -*- coding: utf-8 -*-
#
#  grid.py
#
#  Copyright 2025 Martinez Tossas
#
#  This program is free software; you can redistribute it and/or modify
#  it under the terms of the GNU General Public License as published by
#  the Free Software Foundation; either version 2 of the License, or
#  (at your option) any later version.
#
#  This program is distributed in the hope that it will be useful,
#  but WITHOUT ANY WARRANTY; without even the implied warranty of
#  MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
#  GNU General Public License for more details.
#
#  You should have received a copy of the GNU General Public License
#  along with this program; if not, write to the Free Software
#  Foundation, Inc., 51 Franklin Street, Fifth Floor, Boston,
#  MA 02110-1301, USA.
#
#

"""
grid.py

Structured LES grid description used by the turbines. The grid stores
cell-centre coordinates including ghost cells, the index bounds of the
interior and the strides needed to flatten an (i, j, k) index into the
1-D storage used by the velocity fields:

    n = i + j * jstride + k * kstride
"""

import numpy as np


class grid_class:
    """
    grid_class

    Uniform horizontal grid with an optional stretched vertical grid.

    Parameters
    ----------
    Lx, Ly, Lz : float
        Domain size in x, y, z [m]
    Nx, Ny, Nz : int
        Number of interior cells in x, y, z
    igc, jgc, kgc : int
        Number of ghost cells on each side in x, y, z
    z : array_like, optional
        Interior cell-centre heights [m]. When given, overrides the
        uniform vertical spacing (Nz is taken from its length).
    """

    def __init__(self,
                Lx=5000.,          # Streamwise length [m]
                Ly=2000.,          # Spanwise length [m]
                Lz=200.,           # Wall-normal length [m]
                Nx=500,            # Number of cells in x
                Ny=200,            # Number of cells in y
                Nz=20,             # Number of cells in z
                igc=1,             # Ghost cells in x
                jgc=1,             # Ghost cells in y
                kgc=1,             # Ghost cells in z
                z=None,            # Optional stretched cell centres [m]
                ):

        self.Lx = Lx
        self.Ly = Ly
        self.Lz = Lz
        self.Nx = Nx
        self.Ny = Ny
        self.Nz = Nz if z is None else len(z)
        self.igc = igc
        self.jgc = jgc
        self.kgc = kgc

        self._init_domain(z)

    def _init_domain(self, z=None):
        """
        Create the cell-centre coordinates, the index bounds and the strides.

        Coordinate arrays created:
        - self.x, self.y, self.z : 1D arrays of cell centres including ghost cells
        - self.dx, self.dy : horizontal grid spacing
        """

        # Horizontal spacing is uniform
        self.dx = self.Lx / self.Nx
        self.dy = self.Ly / self.Ny

        # Interior bounds (end index is exclusive)
        self.istart = self.igc
        self.iend = self.igc + self.Nx
        self.jstart = self.jgc
        self.jend = self.jgc + self.Ny
        self.kstart = self.kgc
        self.kend = self.kgc + self.Nz

        # Total number of cells including ghost cells
        self.icells = self.Nx + 2 * self.igc
        self.jcells = self.Ny + 2 * self.jgc
        self.kcells = self.Nz + 2 * self.kgc
        self.ncells = self.icells * self.jcells * self.kcells

        # Strides of the flattened storage
        self.istride = 1
        self.jstride = self.icells
        self.kstride = self.icells * self.jcells

        # Cell centres, the ghost cells continue the interior spacing
        self.x = (np.arange(self.icells) - self.istart + 0.5) * self.dx
        self.y = (np.arange(self.jcells) - self.jstart + 0.5) * self.dy

        if z is None:
            self.dz = self.Lz / self.Nz
            self.z = (np.arange(self.kcells) - self.kstart + 0.5) * self.dz
        else:
            z = np.asarray(z, dtype=np.float64)
            if len(z) < 2:
                raise ValueError('A stretched vertical grid needs at least 2 levels')
            self.dz = np.gradient(z)
            # Continue the first and last spacing into the ghost cells
            below = z[0] - (z[1] - z[0]) * np.arange(self.kgc, 0, -1)
            above = z[-1] + (z[-1] - z[-2]) * np.arange(1, self.kgc + 1)
            self.z = np.concatenate([below, z, above])

    def index(self, i, j, k):
        '''
        Flattened index of cell (i, j, k)
        '''
        return i + j * self.jstride + k * self.kstride

    def get_grid_data(self):
        '''
        The grid is its own data container
        '''
        return self
