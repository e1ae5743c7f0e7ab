# SPDX-FileCopyrightText: 2025-present DouglasMacKrell <d.mackrell@gmail.com>
#
# SPDX-License-Identifier: MIT

"""AudioShelf - Audiobook File Renamer."""

from audioshelf.__about__ import __version__

__all__ = ["__version__"]
