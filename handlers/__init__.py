"""
handlers/ - Presentation Layer
================================
Telegram bot handlers. Each handler parses the command arguments,
delegates to the account's FinanceState or a Service, and sends the
response back to the user.
No business logic lives here.
"""
