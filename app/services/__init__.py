"""
Services module for business logic.

- id_generator: random proxy IDs
- registration_service: webhook URL → proxy URL
- forwarding_service: proxy ID → relayed payload
"""
