"""
coursecatalog: index a folder tree of course materials into a JSON manifest.
"""
