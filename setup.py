from setuptools import setup, find_namespace_packages


setup(
    name='bonds_core',
    version='0.1',
    packages=find_namespace_packages(where="src"),
    package_dir={"": "src"},
    python_requires='>=3.8',
    install_requires=[
        'pydantic>=2',
        'flask>=2.2',
        'flask-openapi3>=3',
        'python-dotenv',
    ],
    extras_require={
        'test': ['pytest'],
    },
    entry_points={
        'console_scripts': [
            'bonds_core = bonds_core.webapi.webapi:main',
        ],
    },
)
