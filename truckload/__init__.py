"""
Truck Load Planning with Shelf Packing

Places boxes into a truck with a deterministic two-phase shelf-packing
heuristic: non-fragile boxes form the base layers and fragile boxes are
stacked above them. Also reports the truck's volume utilization.
"""

__version__ = "0.1.0"
