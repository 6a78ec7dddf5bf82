"""
# fwsplit: firmware image splitter.

A firmware image is seen as a flat sequence of named parts, each one identified
by an offset and a size inside the image. The layout is described by a text file
with one part per line

    name, offset [, size] [, padding_byte]

where numbers can be decimal or hexadecimal (with the 0x prefix), lines starting
with '#' are comments and blank lines are ignored.

Two main operations are defined

 1. unpack(): read the image and write each part to a file named '<name>.bin'

 2. pack(): build the image back from the '<name>.bin' files, padding the
    parts shorter than their declared size.

before both of them a size resolution happens: a part without an explicit size
takes it from the offset of the following part, from the size of the image
(unpacking) or from the size of its own file (packing).

A part passes through the following phases

 1. PARSED
 2. RESOLVED
"""
