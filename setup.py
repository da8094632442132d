from setuptools import setup, find_packages

setup(
    name='ticket-parser',
    version='0.1.0',
    packages=find_packages(exclude=['tests']),
    package_data={'ticket_parser': ['data/*.yaml']},
    include_package_data=True,
    python_requires='>=3.8',
    install_requires=[
        'regex',
        'python-dateutil',
        'click',
        'PyYAML',
        'pdfminer.six',
        'rapidfuzz',
    ],
    extras_require={
        'test': ['pytest'],
    },
    entry_points={
        'console_scripts': [
            'ticket-parser=ticket_parser.cli:main'
        ]
    }
)
