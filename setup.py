from setuptools import find_packages, setup

package_name = "geonav_transform"

setup(
    name=package_name,
    version="0.1.0",
    packages=find_packages(exclude=["test", "tools", "tools.*"]),
    data_files=[
        ("share/ament_index/resource_index/packages", ["resource/" + package_name]),
        ("share/" + package_name, ["package.xml"]),
        (
            "share/" + package_name + "/launch",
            [
                "launch/geonav_transform.launch.py",
            ],
        ),
        (
            "share/" + package_name + "/config",
            [
                "config/geonav_transform.yaml",
            ],
        ),
    ],
    install_requires=["setuptools", "numpy", "scipy", "pyyaml", "pydantic>=2", "pyproj"],
    extras_require={
        "test": ["pytest"],
    },
    zip_safe=True,
    maintainer="you",
    maintainer_email="you@example.com",
    description="Geodetic navigation fixes to UTM and local Cartesian odometry (ROS 2)",
    license="BSD-3-Clause",
    tests_require=["pytest"],
    entry_points={
        "console_scripts": [
            "geonav_transform_node = geonav_transform.nodes.geonav_transform_node:main",
        ],
    },
)
