import os

from launch import LaunchDescription
from launch.actions import DeclareLaunchArgument
from launch.substitutions import LaunchConfiguration
from launch_ros.actions import Node
from ament_index_python.packages import get_package_share_directory


def generate_launch_description():
    use_sim_time = LaunchConfiguration("use_sim_time")
    config_file = LaunchConfiguration("config_file")
    nav_topic = LaunchConfiguration("nav_topic")

    default_config = os.path.join(
        get_package_share_directory("geonav_transform"), "config", "geonav_transform.yaml"
    )

    return LaunchDescription(
        [
            DeclareLaunchArgument("use_sim_time", default_value="false"),
            DeclareLaunchArgument("config_file", default_value=default_config),
            DeclareLaunchArgument(
                "nav_topic",
                default_value="odometry/nav",
                description="Geodetic navigation input (x=lon, y=lat, z=alt)",
            ),
            Node(
                package="geonav_transform",
                executable="geonav_transform_node",
                name="geonav_transform",
                output="screen",
                parameters=[config_file, {"use_sim_time": use_sim_time}],
                remappings=[("odometry/nav", nav_topic)],
            ),
        ]
    )
