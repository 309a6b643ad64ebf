"""
Translation app: public proxy from the front end to the DeepL API.
"""
