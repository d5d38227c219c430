# Metrics package
