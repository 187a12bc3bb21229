from setuptools import setup

setup(
    name='gitlanes',
    version='0.1',
    description='Commit graph lane layout and viewer for Git repositories',
    author='Iliyas Jorio',
    classifiers=[
        'Topic :: Software Development :: Version Control :: Git',
        'Intended Audience :: Developers',
    ],
    packages=[
        'gitlanes',
        'gitlanes.graph',
        'gitlanes.toolbox',
    ],
    entry_points={
        'console_scripts': ['gitlanes=gitlanes.__main__:main']
    },
    python_requires='>= 3.10',
    install_requires=[
        'pygit2 >= 1.15',
        'pyqt6',
    ],
    extras_require={
        'pyqt5': ['pyqt5'],
        'pyside6': ['PySide6 !=6.4.0, !=6.4.0.1, !=6.5.1'],
        'memory-indicator': ['psutil'],
        'test': ['pytest', 'pytest-qt'],
    },
    tests_require=[
        'pytest',
        'pytest-qt',
    ],
)
