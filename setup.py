from glob import glob
from setuptools import setup


setup(
    name='stak',
    use_scm_version={'fallback_version': '0.1.0'},
    description='Command line based RPN calculator',
    install_requires=[
        'regex',
        'prompt_toolkit>=3.0.29',
    ],
    packages=['stak'],
    package_dir={'': 'src'},
    include_package_data=True,
    zip_safe=False,
    classifiers=[
        "Programming Language :: Python :: 3",
    ],
    python_requires='>=3.6',
    setup_requires=[
        'setuptools_scm',
    ],
    extras_require={
        'test': [
            'pytest',
            'pytest-cov',
        ],
    },
    scripts=glob('bin/*'),
    license='ISC',
)
