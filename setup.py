from setuptools import find_packages, setup

setup(
    name='soundshelf',
    version='0.1.0',
    description='Music browsing with a local library of favorites and playlists',
    long_description=open('README.md').read(),
    long_description_content_type='text/markdown',
    author='Soundshelf contributors',
    author_email='',
    license='MIT',
    platforms='ALL',
    packages=find_packages(exclude=['tests', 'tests.*']),
    python_requires='>=3.10',
    install_requires=[
        'pydantic>=2.0.0',
        'pydantic-settings>=2.0.0',
        'pyyaml',
        'requests',
        'typer',
        'rich',
    ],
    extras_require={
        'test': [
            'pytest',
        ],
    },
    entry_points={
        'console_scripts': [
            'soundshelf=soundshelf.cli:main',
        ],
    },
)
