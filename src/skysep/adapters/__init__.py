# Adapters package
