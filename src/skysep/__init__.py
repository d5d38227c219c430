"""skysep - flight-plan trajectory conflict analysis"""

__version__ = "0.1.0"
