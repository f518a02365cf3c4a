#!/usr/bin/env python
# -*- coding: utf-8 -*-
#
#  input.py
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
input.py

Typed access to the case (.ini) file. Items are read per section with an
optional default:

    [turbine]
    diam = 126
    ct   = 0.75

    inp = input_class('case.ini')
    D = inp.get_item('turbine', 'diam')
    dyn = inp.get_item('turbine', 'swdynyaw', bool, False)
"""

import configparser

# Marker for items without a default (required items)
_required = object()


class input_class:
    '''
    Case file reader built on configparser
    '''

    def __init__(self, file_name=None, items=None):
        self.parser = configparser.ConfigParser(inline_comment_prefixes=('#', ';'))

        if file_name is not None:
            read = self.parser.read(file_name)
            if not read:
                raise FileNotFoundError(f'Cannot open input file {file_name}')
            self.file_name = file_name
        else:
            self.file_name = None

        # Items given as {section: {key: value}} are added on top of the file
        if items is not None:
            self.parser.read_dict(
                {section: {key: str(value) for key, value in values.items()}
                    for section, values in items.items()}
            )

    def has_item(self, section, key):
        '''
        True if the item is present in the case file
        '''
        return self.parser.has_option(section, key)

    def get_item(self, section, key, dtype=float, default=_required):
        '''
        Read [section] key converted to dtype (float, int, bool or str).
        Items without a default are required and raise a KeyError when absent.
        '''
        if not self.has_item(section, key):
            if default is _required:
                raise KeyError(f'Required item [{section}] {key} not found in input')
            return default

        try:
            if dtype is bool:
                return self.parser.getboolean(section, key)
            if dtype is str:
                return self.parser.get(section, key).strip()
            return dtype(self.parser.get(section, key))
        except ValueError as e:
            raise ValueError(f'Cannot convert item [{section}] {key}: {e}') from e
