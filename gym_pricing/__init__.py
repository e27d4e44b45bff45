"""
Gym membership pricing and discount engine
"""
