"""
Media app: uploaded images and their alt text.
"""
