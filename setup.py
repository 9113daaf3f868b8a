from setuptools import setup, find_packages

setup(
    name="pydaptivenlms",
    packages=find_packages(
        include=["pydaptivenlms", "pydaptivenlms.*"]),
    version='0.1.0',
    description="A sample-by-sample NLMS adaptive filter engine with a system identification harness.",
    keywords=["Adaptive", "Filtering", "NLMS", "Digital", "Signal", "Processing"],
    python_requires=">=3.8",
    install_requires=[
        'numpy',
    ],
    extras_require={
        'plot': ['matplotlib'],
        'test': ['pytest', 'scipy', 'matplotlib'],
    },

    classifiers=[
        'Development Status :: 3 - Alpha',
        'Intended Audience :: Science/Research',
        'Topic :: Software Development :: Libraries',
        'Programming Language :: Python :: 3'
    ]

)
