"""
ewproj — IAR Embedded Workbench project files as Python objects.
"""

__version__ = "0.1.0"
