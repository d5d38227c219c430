# Visualization package
