"""
Service Orders Domain - Repair jobs and their lifecycle.

This domain handles:
- The ServiceOrder aggregate and its status state machine
- Priced service and part line items
- The customer approval gate and the status history
"""
