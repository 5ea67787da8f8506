# Copyright (C) 2026 Lukas Huwald
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.

from .solver import (
    Solver,
    SolverResult,
    SolverStatus,
    create_solver,
)

__all__ = [
    "Solver",
    "create_solver",
    "SolverStatus",
    "SolverResult",
]
