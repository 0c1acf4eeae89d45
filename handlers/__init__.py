"""
handlers/ - Presentation Layer
================================
Command-line handlers. Each handler receives the parsed arguments,
delegates to the appropriate Service, and prints the result for the user.
No business logic lives here.
"""
