#!/usr/bin/env python
# -*- coding: utf-8 -*-
#
#  example_1_regular_farm.py
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

import actuator_disk_model as adm

import numpy as np

import os
import sys

# Get the directory where the script is located
script_dir = os.path.dirname(os.path.abspath(__file__))
# Change current working directory to that location
os.chdir(script_dir)


def build_case(file_name, dtype=np.float64):
    '''
    Build the grid, fields and wind farm of a case file
    '''
    inp = adm.input_class(file_name)

    grid = adm.grid_class(
                Lx=inp.get_item('grid', 'xsize'),
                Ly=inp.get_item('grid', 'ysize'),
                Lz=inp.get_item('grid', 'zsize'),
                Nx=inp.get_item('grid', 'itot', int),
                Ny=inp.get_item('grid', 'jtot', int),
                Nz=inp.get_item('grid', 'ktot', int),
                )

    fields = adm.fields_class(grid, dtype=dtype)

    return inp, grid, fields


def main(args):
    '''
    Staggered farm in a sheared inflow.
    The flow solver is replaced by a relaxation of the field back to the
    inflow, which is enough to see the disks extract momentum.
    '''
    inp, grid, fields = build_case('example_1.ini')

    # Power law inflow
    fields.add_boundary_layer(Uh=8., h=90., alpha_shear=0.2)
    u_inflow = fields.mp['u'].copy()

    wf = adm.wind_farm_class.from_input(inp, grid, fields,
                                        saveDir='example_1_results', verbose=True)
    wf.create()

    # Time loop
    dt = 1.
    tn = 120.
    relax = 0.1
    t = 0.
    while t < tn:
        # Stand-in for the flow solver
        fields.mp['u'] += relax * (u_inflow - fields.mp['u'])

        wf.exec(None, t)
        t += dt

    # Save and plot the power of all turbines
    wf.save_turbine_power()
    wf.plot_hub_plane(name='hub_plane.png')
    wf.plot_power(name='power.png')

    print(wf.turbine_stats())


if __name__ == "__main__":
    sys.exit(main(sys.argv))
