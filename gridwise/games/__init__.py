"""
Games module - Card sets and setup rules.

Each game has its own subpackage with:
- Card definitions and incentive map
- Initial deal
"""
