"""
Core Package.

Contains the checking backend:
- Code Checker Engine (tree, file and folder analysis)
- Check Result model
"""
