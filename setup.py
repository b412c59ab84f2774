import setuptools

setuptools.setup(
    name = 'curvekernel',
    version = '1.0',
    description = 'parametric curve geometry: arcs, splines, arc-length parameterization and B-spline decomposition',
    packages = setuptools.find_packages(exclude=['tests']),
    install_requires=['numpy', 'scipy'],
    extras_require={'test': ['pytest']},
    python_requires='>=3.6',
)
