"""School admissions API: public application intake and admin back-office."""

__version__ = "0.1.0"
