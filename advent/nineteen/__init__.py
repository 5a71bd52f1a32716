# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Puzzle days for 2019, written against the advent engine.

Production input is read from input/day{N}.txt under the configured input
root; it is personal to each player and not shipped here.
"""
