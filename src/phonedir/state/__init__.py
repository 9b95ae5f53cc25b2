"""State layer.

Holds the ordered person store and the single transient-notification slot.
Only :class:`phonedir.controller.DirectoryController` mutates either.
"""
