"""
nativepack command line interface.

Author: Goncharenko Anton aka alienxs2
License: MIT
"""
