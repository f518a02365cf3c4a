#!/usr/bin/env python
# -*- coding: utf-8 -*-
#
#  wind_farm_plot.py
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

import os

import numpy as np

import matplotlib
import matplotlib.pyplot as plt

# Set plottling parameters
# These parameters can be changed to make the plot look better
matplotlib.rcParams['lines.linewidth'] = 1.5
matplotlib.rcParams['legend.numpoints'] = 1
matplotlib.rcParams['lines.markersize'] = 8
matplotlib.rcParams['font.family'] = 'serif'
matplotlib.rcParams['xtick.major.pad'] = 5
matplotlib.rcParams['xtick.labelsize'] = 12
matplotlib.rcParams['ytick.major.pad'] = 5
matplotlib.rcParams['ytick.labelsize'] = 12
matplotlib.rcParams['axes.labelsize'] = 24
matplotlib.rcParams['axes.titlesize'] = 24
matplotlib.rcParams['legend.fontsize'] = 14

matplotlib.rcParams['mathtext.fontset'] = 'cm'

# For font types (Journal does not accept type 3 fonts)
matplotlib.rcParams['pdf.fonttype'] = 42
matplotlib.rcParams['ps.fonttype'] = 42


def plot_hub_plane(self, name='hubPlane.png', field='u', k=None,
                   vmin=None, vmax=None, cmap='viridis', turb_loc=True):
    """
    Plot a horizontal plane of a velocity component.

    Parameters:
        field: str, one of the components in fields.mp ('u', 'v', 'w')
        k: vertical index, defaults to the hub level of the first turbine
    """
    gd = self.grid
    if k is None:
        k = self.turbines[0].k_hub if self.turbines else gd.kstart

    # Interior of the plane, indexed (j, i)
    data = self.fields.get_3d(field)[k, gd.jstart:gd.jend, gd.istart:gd.iend]
    X, Y = np.meshgrid(gd.x[gd.istart:gd.iend], gd.y[gd.jstart:gd.jend])

    fig, ax = plt.subplots()
    ax.set_aspect('equal', adjustable='box')

    img = ax.pcolormesh(X, Y, data, cmap=cmap, vmin=vmin, vmax=vmax, shading='nearest')
    fig.colorbar(img, ax=ax, fraction=0.046, pad=0.04)

    if turb_loc:
        for t in self.turbines:
            # The rotor is a segment normal to the yaw direction
            dx = -t.D / 2 * np.sin(t.yaw)
            dy = t.D / 2 * np.cos(t.yaw)
            ax.plot([t.x - dx, t.x + dx], [t.y - dy, t.y + dy], '-k', lw=2)

    ax.set_xlabel(r'$x$ [m]')
    ax.set_ylabel(r'$y$ [m]')
    ax.set_title(f'$z$ = {gd.z[k]:.0f} m')

    fig.savefig(os.path.join(self.saveDir, name), bbox_inches='tight', dpi=250)
    plt.close(fig)


def plot_power(self, name='power.png'):
    '''
    Plot the recorded power of every turbine and of the farm
    '''
    df = self.turbine_stats()

    fig, ax = plt.subplots()
    for col in df.columns:
        if col == 'farm':
            continue
        ax.plot(df.index, df[col], '-', label=col)
    ax.plot(df.index, df['farm'], '-k', lw=2, label='farm')

    ax.set_xlabel('Time [s]')
    ax.set_ylabel('Power [kW]')
    ax.legend()

    fig.savefig(os.path.join(self.saveDir, name), bbox_inches='tight', dpi=250)
    plt.close(fig)
