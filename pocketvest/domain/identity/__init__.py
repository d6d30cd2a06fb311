"""
Identity bounded context, domain layer.

- Credential store port
- Identity manager (sign-up, sign-in, sign-out, account deletion)
- Onboarding flow state machine
"""
