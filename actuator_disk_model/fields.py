#!/usr/bin/env python
# -*- coding: utf-8 -*-
#
#  fields.py
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

import numpy as np


class fields_class:
    '''
    Container of the prognostic velocity components.
    Every component is stored as a flat array following the
    flattening of the grid (n = i + j*jstride + k*kstride).
    The precision is one choice for the whole field container.
    '''

    def __init__(self, grid, dtype=np.float64):
        self.grid = grid
        self.dtype = np.dtype(dtype)

        # The velocity components by name
        self.mp = {name: np.zeros(grid.ncells, dtype=self.dtype)
                        for name in ('u', 'v', 'w')}

    def get_3d(self, name):
        '''
        A (k, j, i) view of a flat component, writes go to the flat array
        '''
        gd = self.grid
        return self.mp[name].reshape(gd.kcells, gd.jcells, gd.icells)

    def set_uniform(self, u=0., v=0., w=0.):
        '''
        Set every cell of each component to a constant
        '''
        self.mp['u'].fill(u)
        self.mp['v'].fill(v)
        self.mp['w'].fill(w)

    def add_boundary_layer(self, Uh=1., h=90., alpha_shear=0.2):
        """
        Apply a power-law boundary layer to the u component.

        Parameters
        ----------
        Uh : float
            Velocity at height h [m/s]
        h : float
            Reference height [m]
        alpha_shear : float
            Shear exponent, e.g. 0.14 to 0.2 for typical ABL
        """
        z = np.maximum(self.grid.z, 0.)

        # Power law profile
        Ubl = Uh * (z / h)**alpha_shear

        # Only allow velocities higher than 20 percent of Uh
        Ubl = np.maximum(0.2 * Uh, Ubl)

        self.get_3d('u')[:] = Ubl[:, np.newaxis, np.newaxis].astype(self.dtype)
