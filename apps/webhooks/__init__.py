"""
Webhooks app: notify the front-end build system after content changes commit.
"""
