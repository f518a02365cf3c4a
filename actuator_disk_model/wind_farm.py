#!/usr/bin/env python
# -*- coding: utf-8 -*-
#
#  wind_farm.py
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
wind_farm.py

This module defines the `wind_farm_class`, the collection of actuator disk
turbines that force the velocity field of a large-eddy simulation. The farm
builds its layout either as a regular (optionally staggered) array of rows
and columns or from a layout file, and advances every turbine once per time
step in a fixed order while summing the farm power.

It also includes convenience methods for:

- Reading turbine layouts from text files
- Circular mean of the turbine yaw angles
- Turbine and farm power tables and CSV output
- Attaching plotting methods

Example:
--------
To run the example case:
    $ python examples/example_1_regular_farm.py

Dependencies:
-------------
- numpy
- scipy
- pandas
- matplotlib (for plotting, attached separately)
- user-defined modules: `turbine_model`, `wind_farm_plot`
"""

from . import turbine_model as tm
from .master import master_class

# Auto-import and attach all plot functions from another file
import types
from . import wind_farm_plot as methods_plot

import os

import numpy as np
from scipy.stats import circmean
import pandas as pd


def read_layout_file(file_name):
    '''
    Read turbine positions (x, y, hub height) from a text file.
    The numbers are read as one whitespace separated stream in groups of 3.
    Reading stops at the first value that is not a finite number; the turbines
    read before that point are kept.
    '''
    try:
        with open(file_name) as f:
            tokens = [tok for line in f
                        for tok in line.split('#', 1)[0].split()]
    except OSError as e:
        raise FileNotFoundError(f'Cannot open layout file {file_name}') from e

    values = []
    for tok in tokens:
        try:
            value = float(tok)
        except ValueError:
            break
        # nan and inf are not positions
        if not np.isfinite(value):
            break
        values.append(value)

    n = len(values) // 3
    ignored = len(tokens) - 3 * n
    if ignored:
        print(f'Layout file {file_name}: stopped after {n} turbines, '
              f'{ignored} values ignored')

    return [tuple(values[3 * i:3 * i + 3]) for i in range(n)]


class wind_farm_class:
    """
    wind_farm_class

    A collection of actuator disk turbines acting on a shared velocity field.
    The turbines are kept in an ordered list and run one after the other, so
    a turbine sees the forcing of the turbines before it in the same step.

    Parameters
    ----------
    grid : grid_class
        Grid description
    fields : fields_class
        Velocity fields shared with the flow solver
    turbine_params : dict
        Parameters given to every turbine (see turbine_model.read_turbine_params)
    nrows, ncols : int
        Number of rows (along y) and columns (along x) of the regular layout
    spacing_x, spacing_y : float
        Turbine spacing in x and y [D]
    staggered : bool
        Shift odd rows by half a spacing in x
    farm_x, farm_y : float
        Location of the first turbine [m]
    layout_file : str
        File with (x, y, hub height) per turbine, replaces the regular layout
    master : master_class
        Process controller used for reductions
    saveDir : str
        Directory path to save output files and figures
    verbose : bool
        Print diagnostics

    Notes
    -----
    - Call `create()` once the grid is final and `exec()` every time step.
    - Power output utilities and plots are included.
    """

    def __init__(self,
                grid,
                fields,
                turbine_params,
                nrows=1,           # Number of turbine rows
                ncols=1,           # Number of turbine columns
                spacing_x=0.,      # Spacing in x [D]
                spacing_y=0.,      # Spacing in y [D]
                staggered=False,   # Staggered rows
                farm_x=0.,         # Farm location x [m]
                farm_y=0.,         # Farm location y [m]
                layout_file='',    # Optional layout file
                master=None,       # Process controller
                saveDir='./',      # Directory to save data
                verbose=False,     # Print diagnostics
                ):
        '''
        Initialize the function
        '''

        self.grid = grid
        self.fields = fields
        self.turbine_params = dict(turbine_params)
        self.nrows = nrows
        self.ncols = ncols
        self.spacing_x = spacing_x
        self.spacing_y = spacing_y
        self.staggered = staggered
        self.farm_x = farm_x
        self.farm_y = farm_y
        self.layout_file = layout_file
        self.master = master if master is not None else master_class()
        self.saveDir = saveDir
        self.verbose = verbose

        # Diameter shared by all turbines
        self.D = self.turbine_params['D']

        # Aggregate power of the last time step
        self.farm_power = 0.

        # The turbines owned by the farm
        self.turbines = []

        # Farm time history, sampled like the turbine statistics
        self.turb_stats = self.turbine_params.get('turb_stats', False)
        self.stats_period = self.turbine_params.get('stats_period', 0.)
        self.next_stats = self.turbine_params.get('start_time', 0.)
        self.time = []
        self.farm_power_time = []

        # Create plotting directory
        if not os.path.exists(self.saveDir):
            os.makedirs(self.saveDir)

    @classmethod
    def from_input(cls, inp, grid, fields, **kwargs):
        '''
        Build the farm from the [windfarm] and [turbine] sections
        '''
        return cls(
                grid,
                fields,
                tm.read_turbine_params(inp),
                nrows=inp.get_item('windfarm', 'nturbrows', int, 1),
                ncols=inp.get_item('windfarm', 'nturbcols', int, 1),
                spacing_x=inp.get_item('windfarm', 'spacingx', float, 0.),
                spacing_y=inp.get_item('windfarm', 'spacingy', float, 0.),
                staggered=inp.get_item('windfarm', 'swstaggered', bool, False),
                farm_x=inp.get_item('windfarm', 'farmlocx', float, 0.),
                farm_y=inp.get_item('windfarm', 'farmlocy', float, 0.),
                layout_file=inp.get_item('windfarm', 'layoutfile', str, ''),
                **kwargs)

    def layout_positions(self):
        '''
        The (x, y, hub height) of every turbine, in the order they are built.
        A hub height of -1 keeps the default of the turbine.
        '''
        if self.layout_file:
            return read_layout_file(self.layout_file)

        positions = []
        for r in range(self.nrows):
            y = self.farm_y + r * self.spacing_y * self.D
            for c in range(self.ncols):
                # Odd rows are shifted by half a spacing
                offset = 0.5 * self.spacing_x * self.D if (self.staggered and r % 2 == 1) else 0.
                x = self.farm_x + c * self.spacing_x * self.D + offset
                positions.append((x, y, -1.))

        return positions

    def check_position(self, x, y):
        '''
        The full rotor has to fit in the horizontal domain
        '''
        r = 0.5 * self.D
        if not (np.isfinite(x) and np.isfinite(y)):
            raise ValueError(f'Turbine at x={x}, y={y} has a non-finite position')
        if (x - r < 0 or x + r > self.grid.Lx or
                y - r < 0 or y + r > self.grid.Ly):
            raise ValueError(f'Turbine at x={x}, y={y} too close to boundary '
                             f'(D={self.D}, domain {self.grid.Lx} x {self.grid.Ly})')

    def create(self):
        """
        Build the turbines and their disk stencils.

        All positions are checked before any turbine is built, so a bad
        layout leaves the farm empty. Calling it again rebuilds the layout.
        """
        # Remove existing turbine list and the history of the old layout
        self.turbines = []
        self.time = []
        self.farm_power_time = []
        self.next_stats = self.turbine_params.get('start_time', 0.)

        positions = self.layout_positions()
        for x, y, _ in positions:
            self.check_position(x, y)

        for n, (x, y, hh) in enumerate(positions):
            turbine = tm.turbine_model_class(
                        self.grid,
                        self.fields,
                        x=x,
                        y=y,
                        hhub_override=hh,
                        master=self.master,
                        name=f'T{n + 1:03d}',
                        verbose=self.verbose,
                        **self.turbine_params,
                        )
            self.turbines.append(turbine)
            turbine.create()

        if self.verbose:
            print(f'Created wind farm with {len(self.turbines)} turbines')

    def exec(self, stats, time):
        '''
        Apply the forcing of all turbines for one time step
        '''
        # Reset accumulator
        self.farm_power = 0.
        for turbine in self.turbines:
            turbine.exec(stats, time)
            self.farm_power += turbine.get_power()

        # Sample the farm on the same schedule as its turbines
        if self.turb_stats and time >= self.next_stats:
            self.time.append(time)
            self.farm_power_time.append(self.farm_power)
            if self.stats_period > 0:
                self.next_stats += self.stats_period

        if self.verbose:
            print('Wind farm power at t=', time, 'is', self.farm_power)

    def get_farm_power(self):
        '''
        Farm power of the last time step
        '''
        return self.farm_power

    def mean_yaw(self):
        '''
        Circular mean of the turbine yaw angles [rad] in [-pi, pi)
        '''
        if not self.turbines:
            return 0.
        return circmean([t.yaw for t in self.turbines], high=np.pi, low=-np.pi)

    def turbine_stats(self):
        '''
        Table of the recorded turbine and farm power [kW]
        '''
        # Build a dictionary: keys are turbine names, values are power time series in kW
        power_data = {
            turb.name: np.array(turb.pwr_time) * 1e-3 for turb in self.turbines
        }
        power_data['farm'] = np.array(self.farm_power_time) * 1e-3

        # Create DataFrame with time as index
        df = pd.DataFrame(power_data, index=self.time)
        df.index.name = 'Time'

        return df

    def save_turbine_power(self, fname='turbine_power.csv'):
        '''
        Save the turbine power to a file
        '''
        self.turbine_stats().to_csv(os.path.join(self.saveDir, fname))


# Import the plot methods from other file
for name in dir(methods_plot):
    func = getattr(methods_plot, name)
    if isinstance(func, types.FunctionType):
        setattr(wind_farm_class, name, func)
