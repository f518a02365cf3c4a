#!/usr/bin/env python
# -*- coding: utf-8 -*-
#
#  turbine_model.py
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

from .master import master_class
from .wind_farm_utils import disk_stencil, normalize_weights, nearest_index


def read_turbine_params(inp):
    '''
    Read the [turbine] section of the case file.
    diam, hhub, ct, cp and tsr are required.
    '''
    return dict(
        # Rotor diameter [m]
        D=inp.get_item('turbine', 'diam'),
        # Hub height [m]
        hhub=inp.get_item('turbine', 'hhub'),
        # Thrust coefficient [-]
        Ct=inp.get_item('turbine', 'ct'),
        # Power coefficient [-]
        Cp=inp.get_item('turbine', 'cp'),
        # Tip speed ratio [-]
        tsr=inp.get_item('turbine', 'tsr'),
        # Dynamic yaw control
        dyn_yaw=inp.get_item('turbine', 'swdynyaw', bool, False),
        # Yaw update period [s]
        yaw_period=inp.get_item('turbine', 'yawperiod', float, 0.),
        # Time at which the forcing starts [s]
        start_time=inp.get_item('turbine', 'turbstarttime', float, 0.),
        # Turbine statistics
        turb_stats=inp.get_item('turbine', 'swturbstats', bool, False),
        # Statistics period [s]
        stats_period=inp.get_item('turbine', 'turbstatperiod', float, 0.),
    )


class turbine_model_class():
    '''
    This is the class for an individual actuator disk.
    The rotor is not resolved; it is a permeable disk at hub height
    that covers the grid cells within one radius of the rotor centre.
    Every time step the turbine:
        - averages the velocity normal to the disk over the covered cells
          with Gaussian weights that sum to one,
        - computes the thrust and the power from that average,
        - removes the thrust from the velocity field with the same weights.
    The yaw can follow the wind measured one diameter upstream.

    The coordinate system is the one of the grid, with the ground at z=0.
    The yaw is measured from the x axis, counter-clockwise, in radians.
    '''

    def __init__(self,
                    grid,                          # Grid description
                    fields,                        # Velocity fields
                    D=None,                        # Turbine diameter [m]
                    hhub=None,                     # Hub height [m]
                    Ct=None,                       # Thrust coefficient [non-dim]
                    Cp=None,                       # Power coefficient [non-dim]
                    tsr=None,                      # The tip speed ratio (non-dimensional)
                    x=0.,                          # Rotor centre x [m]
                    y=0.,                          # Rotor centre y [m]
                    hhub_override=None,            # Hub height from a layout file [m]
                    dyn_yaw=False,                 # Yaw follows the wind
                    yaw_period=0.,                 # Time between yaw updates [s]
                    start_time=0.,                 # Time at which forcing starts [s]
                    turb_stats=False,              # Keep a time history
                    stats_period=0.,               # Time between history samples [s]
                    master=None,                   # Process controller for reductions
                    name='turbine 1',              # name of the turbine
                    verbose=False,                 # Print diagnostics
                    ):
        '''
        Initialize the actuator disk variables
        '''
        missing = [key for key, value in (('D', D), ('hhub', hhub), ('Ct', Ct), ('Cp', Cp), ('tsr', tsr))
                        if value is None]
        if missing:
            raise ValueError(f'{name}: missing turbine parameters {", ".join(missing)}')

        self.grid = grid
        self.fields = fields
        self.master = master if master is not None else master_class()

        # Turbine diameter
        self.D = D
        # Hub height, a positive override replaces the default
        self.hhub = hhub_override if (hhub_override is not None and hhub_override > 0) else hhub
        # Thrust coefficient
        self.Ct = Ct
        # Power coefficient
        self.Cp = Cp
        # Tip speed ratio
        self.tsr = tsr
        # Rotor centre
        self.x = x
        self.y = y
        # Turbine name
        self.name = name
        self.verbose = verbose

        # Dynamic yaw
        self.dyn_yaw = dyn_yaw
        self.yaw_period = yaw_period
        self.start_time = start_time

        # Statistics
        self.turb_stats = turb_stats
        self.stats_period = stats_period

        # Rotor area
        self.area = np.pi * self.D**2 / 4

        # Yaw angle in radians
        self.yaw = 0.
        # Next time the yaw is updated
        self.next_yaw = start_time
        # Next time the statistics are sampled
        self.next_stats = start_time

        # Disk quantities of the last time step
        self.pwr = 0.
        self.thrust = 0.
        self.Uh = 0.

        # Set by create()
        self.k_hub = None
        self.indices = np.empty(0, dtype=np.int64)
        self.weights = np.empty(0, dtype=np.float64)

        # The time history
        self.time = []
        self.pwr_time = []
        self.Uh_time = []
        self.thrust_time = []
        self.yaw_time = []

    @classmethod
    def from_input(cls, inp, grid, fields, x, y, hhub_override=None, **kwargs):
        '''
        Build a turbine from the [turbine] section of the case file
        '''
        return cls(grid, fields, x=x, y=y, hhub_override=hhub_override,
                    **read_turbine_params(inp), **kwargs)

    @property
    def location(self):
        """Rotor hub location (x, y, hub height)."""
        return (self.x, self.y, self.hhub)

    @property
    def n_cells(self):
        """Number of grid cells covered by the disk."""
        return len(self.indices)

    def create(self):
        '''
        Find the hub level and the cells covered by the disk.
        Needs the final grid.
        '''
        gd = self.grid.get_grid_data()

        # Vertical level closest to the hub height
        self.k_hub = nearest_index(gd.z, self.hhub, gd.kstart, gd.kend)

        # Gaussian filter width based on grid spacing (uniform in x and y)
        delta = 1.5 * gd.dx
        radius = self.D / 2

        idx, w = disk_stencil(gd.x, gd.y,
                              gd.istart, gd.iend, gd.jstart, gd.jend,
                              gd.jstride, gd.kstride, self.k_hub,
                              float(self.x), float(self.y), float(radius), float(delta))

        self.indices, self.weights = normalize_weights(idx, w)

        if self.verbose:
            print(f'{self.name}: {self.n_cells} cells at level k={self.k_hub} '
                  f'(z={gd.z[self.k_hub]:.1f} m)')

    def update_yaw(self):
        '''
        Relax the yaw toward the wind direction one diameter upstream
        '''
        gd = self.grid.get_grid_data()
        u = self.fields.mp['u']
        v = self.fields.mp['v']

        # Point one diameter upstream along the current yaw
        xref = self.x - self.D * np.cos(self.yaw)
        yref = self.y - self.D * np.sin(self.yaw)

        i = nearest_index(gd.x, xref, gd.istart, gd.iend)
        j = nearest_index(gd.y, yref, gd.jstart, gd.jend)
        n = gd.index(i, j, self.k_hub)

        ur = self.master.sum(float(u[n]))
        vr = self.master.sum(float(v[n]))

        # Target wind direction
        target = np.arctan2(vr, ur)
        # First order relaxation toward the target
        self.yaw += 0.2 * (target - self.yaw)

        self.next_yaw += self.yaw_period

    def disk_velocity(self):
        '''
        Weighted average of the velocity normal to the disk
        '''
        u = self.fields.mp['u']
        v = self.fields.mp['v']
        idx = self.indices

        # Local part of the sum, completed over all processes
        un = u[idx] * np.cos(self.yaw) + v[idx] * np.sin(self.yaw)
        return self.master.sum(float(np.dot(self.weights, un)))

    def exec(self, stats, time):
        '''
        Apply the actuator disk forcing for one time step.
        stats is passed through by the driver and not used here.
        '''
        # Skip forcing until turbine start time
        if time < self.start_time:
            return

        if self.dyn_yaw and time >= self.next_yaw:
            self.update_yaw()

        self.Uh = self.disk_velocity()

        # Thrust keeps its sign if the flow reverses
        self.thrust = 0.5 * self.Ct * self.Uh * np.abs(self.Uh)
        # Power from the disk-averaged velocity
        self.pwr = self.Cp * 0.5 * self.Uh**3 * self.area

        # Remove the thrust from the covered cells
        f = self.thrust * self.weights
        self.fields.mp['u'][self.indices] -= f * np.cos(self.yaw)
        self.fields.mp['v'][self.indices] -= f * np.sin(self.yaw)

        if self.turb_stats and time >= self.next_stats:
            self.update_time_vars(t=time)
            if self.stats_period > 0:
                self.next_stats += self.stats_period

        if self.verbose:
            print(f'{self.name}: t={time} Uh={self.Uh:.3f} yaw={np.rad2deg(self.yaw):.2f} deg '
                  f'power={self.pwr:.3f}')

    def update_time_vars(self, t=0):
        '''
        Update the time vars by appending the latest time
        '''
        self.time.append(t)
        self.pwr_time.append(self.pwr)
        self.Uh_time.append(self.Uh)
        self.thrust_time.append(self.thrust)
        self.yaw_time.append(self.yaw)

    def get_power(self):
        '''
        The turbine power of the last time step
        '''
        return self.pwr

    def get_thrust(self):
        '''
        The thrust of the last time step
        '''
        return self.thrust
