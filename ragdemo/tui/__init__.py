"""
Console menu for choosing and running a sample.
"""
