"""
Calc Studio - Calculator Demo Application

A small demo that wires a basic arithmetic calculator and a greeting
helper into an HTML page, a JSON API and a command-line interface.
"""

__version__ = "1.0.0"
__author__ = "Calc Studio Team"
