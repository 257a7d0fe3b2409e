import setuptools

with open('README.md', 'rt') as f:
    long_description = f.read()

setuptools.setup(
    name='fixdec',
    version='0.0.0',
    description='deterministic fixed-point decimal arithmetic on 128-bit integers, with sqrt, logarithms and powers',
    long_description=long_description,
    license='MIT',
    install_requires=['numpy>=1.23.0', 'gmpy2>=2.1.2'],
    extras_require={
        'test' : ['pytest'],
    },
    packages=['fixdec', 'fixdec/core', 'fixdec/arithmetic'],
    classifiers=[
        'Development Status :: 3 - Alpha',
        'Operating System :: POSIX :: Linux',
        'License :: OSI Approved :: MIT License',
    ],
)
