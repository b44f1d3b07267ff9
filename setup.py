from setuptools import setup, find_packages

setup(
    name='dorm_hygiene_report',
    version='1.0.0',
    description='Dormitory hygiene inspection report: grouped, ranked Excel tables with merged cells',
    packages=find_packages(exclude=['tests', 'tests.*']),
    install_requires=['pandas>=2.0.0', 'XlsxWriter>=3.0.0'],
    extras_require={'test': ['pytest>=7.0', 'openpyxl>=3.1']},
    entry_points={'console_scripts': ['hygiene-report=hygiene_core.runner:main']},
    python_requires='>=3.9',
)
