"""CSV user importer for the weekly lesson planner.

Turns an uploaded CSV of teacher/admin accounts into validated user records
and, through the batch CLI, inserts them into the planner's ``users`` table.
"""

__version__ = "0.1.0"
