#!/usr/bin/env python3
'''
Split a firmware image into its parts or join the parts back into the image.

 $ firmware_tool.py unpack firmware.img layout.cfg
 $ firmware_tool.py pack firmware.img layout.cfg
'''
import sys

from fwsplit.cli import main


if __name__ == '__main__':
    sys.exit(main(sys.argv))
