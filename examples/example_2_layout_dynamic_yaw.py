#!/usr/bin/env python
# -*- coding: utf-8 -*-
#
#  example_2_layout_dynamic_yaw.py
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

from example_1_regular_farm import build_case


def main(args):
    '''
    Turbines from a layout file that yaw into a veering wind.
    The wind direction turns from 0 to 20 degrees after the turbines start.
    '''
    inp, grid, fields = build_case('example_2.ini', dtype=np.float32)

    wf = adm.wind_farm_class.from_input(inp, grid, fields,
                                        saveDir='example_2_results')
    wf.create()

    Uh = 8.
    dt = 1.
    tn = 200.
    relax = 0.2
    t = 0.
    while t < tn:
        # Wind direction of the inflow [rad]
        wdir = np.deg2rad(min(20., 20. * t / 100.))

        # Stand-in for the flow solver
        fields.mp['u'] += relax * (Uh * np.cos(wdir) - fields.mp['u'])
        fields.mp['v'] += relax * (Uh * np.sin(wdir) - fields.mp['v'])

        wf.exec(None, t)

        if t % 20 == 0:
            print('t=', t, 'farm power [MW]=', wf.get_farm_power() * 1e-6,
                  'mean yaw [deg]=', np.rad2deg(wf.mean_yaw()))
        t += dt

    for turbine in wf.turbines:
        print(turbine.name, turbine.location, 'yaw [deg]=', np.rad2deg(turbine.yaw))

    wf.save_turbine_power()
    wf.plot_hub_plane(name='hub_plane.png')
    wf.plot_power(name='power.png')


if __name__ == "__main__":
    sys.exit(main(sys.argv))
