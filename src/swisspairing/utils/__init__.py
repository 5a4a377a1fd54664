"""Shared helpers for Swiss Pairing: logging setup."""

# Swiss Pairing
# Copyright (C) 2025  Swiss Pairing developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

import logging

PACKAGE_LOGGER_NAME = "swisspairing"
LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"

# Library code stays silent unless the application configures logging
logging.getLogger(PACKAGE_LOGGER_NAME).addHandler(logging.NullHandler())


def setup_logger(name: str) -> logging.Logger:
    """Return the module logger for ``name``.

    Args:
        name: Usually ``__name__`` of the calling module

    Returns:
        A logger in the ``swisspairing`` hierarchy
    """
    if not name.startswith(PACKAGE_LOGGER_NAME):
        name = f"{PACKAGE_LOGGER_NAME}.{name}"
    return logging.getLogger(name)


def configure_logging(verbose: bool = False) -> None:
    """Attach a console handler for command-line use."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger().setLevel(level)
