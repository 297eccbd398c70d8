"""
Setup script for Cythonizing the multibag core modules.

This script compiles the Python modules in multibag using Cython
for performance optimization. The pure Python modules remain the reference.

Usage:
    python setup_cython.py build_ext --inplace
"""
from setuptools import setup, Extension
from Cython.Build import cythonize

# Define the modules to be cythonized
extensions = [
    Extension("multibag.storage", ["multibag/storage.py"]),
    Extension("multibag.index", ["multibag/index.py"]),
    Extension("multibag.algebra", ["multibag/algebra.py"]),
    Extension("multibag.multiset", ["multibag/multiset.py"]),
]

setup(
    name="multibag-cython",
    ext_modules=cythonize(
        extensions,
        compiler_directives={
            'language_level': '3',
            'boundscheck': False,
            'wraparound': False,
            'cdivision': True,
            'initializedcheck': False,
            'embedsignature': True,
        },
        annotate=True,  # Generate HTML annotation files
    ),
)
