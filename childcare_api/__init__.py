"""
Childcare management record API.

Children, guardians, authorized persons and their financial/personal records,
exposed through CRUD endpoints, plus the child/guardian and
child/authorized-person association links.
"""

__version__ = "1.0.0"
