import setuptools

with open("README.rst", "r") as fh:
    long_description = fh.read()

setuptools.setup(
    name="lensy",
    version="1.4.0",
    author="Michael H. Williamson",
    description="Geometric ray tracing of rays through quadric and planar "
                "optical surfaces",
    long_description=long_description,
    long_description_content_type="text/x-rst",
    license="GPL-2.0-or-later",
    package_dir={"": "src"},
    packages=setuptools.find_packages(where="src"),
    python_requires=">=3.10",
    classifiers=[
        "Programming Language :: Python :: 3.10",
        "License :: OSI Approved :: GNU General Public License v2 or later (GPLv2+)",
        "Operating System :: OS Independent",
        "Topic :: Scientific/Engineering :: Physics",
    ],
    keywords=['geometric optics', 'ray tracing', 'quadric surfaces',
              'diffraction grating', 'dispersion', 'spot size'],
    install_requires=[
        "opticalglass",
        "numpy>=1.24.4",
        "scipy>=1.1.0",
        "matplotlib>=2.2.3",
        "pandas>=0.23.4",
        "attrs>=18.1.0",
        "transforms3d>=0.3.1"
        ],
    extras_require={
        'test': ["pytest"],
    },
)
