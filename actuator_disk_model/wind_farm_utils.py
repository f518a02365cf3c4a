#!/usr/bin/env python
# -*- coding: utf-8 -*-
#
#  wind_farm_utils.py
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
from numba import njit


@njit
def disk_stencil(x, y, istart, iend, jstart, jend, jstride, kstride, k,
                    xpos, ypos, radius, delta):
    """
    Collect the cells of level k whose centre lies inside the rotor disk.

    Parameters:
        x, y: 1D arrays of cell centres (including ghost cells)
        istart, iend, jstart, jend: interior bounds (end exclusive)
        jstride, kstride: strides of the flattened storage
        k: vertical level of the disk
        xpos, ypos: rotor centre [m]
        radius: rotor radius [m]
        delta: Gaussian filter width [m]

    Returns:
        idx: flattened indices of the covered cells (j outer, i inner)
        w: raw Gaussian weights exp(-6 r^2 / delta^2), not normalised
    """
    n_max = (iend - istart) * (jend - jstart)
    idx = np.empty(n_max, dtype=np.int64)
    w = np.empty(n_max, dtype=np.float64)

    n = 0
    for j in range(jstart, jend):
        for i in range(istart, iend):
            dx = x[i] - xpos
            dy = y[j] - ypos
            r2 = dx * dx + dy * dy
            # Inclusive test on the rotor edge
            if np.sqrt(r2) <= radius:
                idx[n] = i + j * jstride + k * kstride
                w[n] = np.exp(-6. * r2 / (delta * delta))
                n += 1

    return idx[:n].copy(), w[:n].copy()


def normalize_weights(idx, w):
    '''
    Scale the weights to a unit sum.
    A stencil without positive weight is returned empty.
    '''
    wsum = w.sum()
    if wsum > 0:
        return idx, w / wsum
    return idx[:0], w[:0]


def nearest_index(arr, val, start, end):
    '''
    Index in [start, end) of the value in arr closest to val (first one on ties)
    '''
    return start + int(np.abs(arr[start:end] - val).argmin())
