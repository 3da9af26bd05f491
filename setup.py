from setuptools import setup

package_name = 'online_estimation'

setup(
    name=package_name,
    version='0.1.0',
    packages=[
        package_name,
        f'{package_name}.stats',
        f'{package_name}.models',
        f'{package_name}.estimation',
    ],
    package_dir={
        package_name: 'src',
        f'{package_name}.stats': 'src/stats',
        f'{package_name}.models': 'src/models',
        f'{package_name}.estimation': 'src/estimation',
    },
    python_requires='>=3.10',
    install_requires=['numpy', 'scipy', 'matplotlib', 'tyro'],
    extras_require={
        'test': ['pytest'],
    },
    zip_safe=True,
    maintainer='root',
    maintainer_email='franche1984@gmail.com',
    description='Online parameter estimation: stochastic gradient models and flexible least squares',
    license='MIT',
    entry_points={
        'console_scripts': [
            'online-estimation-replay = online_estimation.replay_cli:entry_point',
        ],
    },
)
