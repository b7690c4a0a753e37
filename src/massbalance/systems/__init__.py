"""Aircraft systems package.

Holds the calculation engines that work on aircraft configuration data.
"""
