# Trajectory package
