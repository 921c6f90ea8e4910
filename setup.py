"""
setup.py - Package Installation Configuration
==============================================
"""

from setuptools import setup
from pathlib import Path

# Read README for long description
readme_file = Path(__file__).parent / "README.md"
if readme_file.exists():
    long_description = readme_file.read_text()
else:
    long_description = "Polygon covering with axis-aligned squares, rectangles and circles"

# Read requirements
requirements_file = Path(__file__).parent / "requirements.txt"
if requirements_file.exists():
    with open(requirements_file) as f:
        requirements = [line.strip() for line in f
                        if line.strip() and not line.startswith('#')]
else:
    requirements = [
        'numpy>=1.21.0',
        'shapely>=2.0.0',
        'matplotlib>=3.4.0',
    ]

setup(
    name='polygon-covering',
    version='1.0.0',
    description='Greedy block-merge covering of polygons by axis-aligned squares and rectangles',
    long_description=long_description,
    long_description_content_type='text/markdown',
    py_modules=[
        'block_merge_engine',
        'config_covering',
        'coverage_statistics',
        'covering_geometry',
        'covering_io',
        'covering_models',
        'covering_visualizer',
        'grid_discretizer',
        'main_covering',
        'region_union',
        'utils',
    ],
    classifiers=[
        'Development Status :: 4 - Beta',
        'Intended Audience :: Developers',
        'Intended Audience :: Science/Research',
        'Topic :: Scientific/Engineering :: Mathematics',
        'License :: OSI Approved :: MIT License',
        'Programming Language :: Python :: 3',
        'Operating System :: OS Independent',
    ],
    python_requires='>=3.8',
    install_requires=requirements,
    extras_require={
        'dev': [
            'pytest>=6.2.0',
            'black>=21.6b0',
            'flake8>=3.9.0',
            'mypy>=0.910',
            'coverage>=5.5',
        ],
        'test': [
            'pytest>=6.2.0',
        ],
    },
    entry_points={
        'console_scripts': [
            'polygon-cover=main_covering:main',
        ],
    },
    zip_safe=False,
)
