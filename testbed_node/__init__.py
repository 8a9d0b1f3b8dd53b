"""
CoAP testbed node - simulated actuator and sensor endpoints for the IoT testbed
"""

__version__ = "1.0.0"
