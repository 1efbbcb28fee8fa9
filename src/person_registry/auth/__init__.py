"""
person_registry.auth

Caller identity package.

Responsibilities:
- Model the owner identity handed in by the request layer.
"""

# Package marker.
