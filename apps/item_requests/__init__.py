"""Item requests app package.

The request board: users post "I need an X" requests and other users can
list items in answer to them (``Item.request``).
"""
