#!/usr/bin/env python
# -*- coding: utf-8 -*-
#
#  master.py
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

class master_class:
    '''
    Serial process controller.
    A decomposed run replaces this with a controller whose sum() is an
    all-reduce over the processes. The turbines call sum() once per disk
    average and once per upstream sample, so every process ends up with the
    same thrust and yaw.
    '''

    def __init__(self):
        self.mpiid = 0
        self.nprocs = 1

    def sum(self, value):
        return value
