#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
MOS patch downloader (launcher)

What it does
------------
• Logs on to My Oracle Support once (credentials from MOSUser/MOSPass or prompted).
• Picks the platform/language codes (platform=..., cached list, or live catalog).
• Finds the download links of every patch x platform, multi-part patches included.
• Lets you pick files per patch (or download=all with a regexp filter).
• Streams the files into stagedir with progress and throughput.

Install:  pip install -e .
Run:      python get_mos_patch.py patch=6880880 regexp=.*1120.* download=all
"""
import sys

from mos_patch.cli import main

if __name__ == "__main__":
    sys.exit(main())
