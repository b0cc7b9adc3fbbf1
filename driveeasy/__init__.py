"""
DriveEasy: аренда автомобилей с витриной, админ-консолью и REST API
"""
__version__ = "1.0.0"
