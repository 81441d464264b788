"""
                Foodingo Client Core

Session, cart and checkout state for the Foodingo food-ordering client,
with a hybrid Mock/Real collaborator architecture (remote API, key-value
storage, notifications).

Version: 1.0.0
"""

__version__ = "1.0.0"
