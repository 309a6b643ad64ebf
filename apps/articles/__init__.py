"""
Articles app: article collection, publication checklist and preview.
"""
