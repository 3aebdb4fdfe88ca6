"""
Use Cases

Organized into domain folders:
- auth/: Signup, login and password reset
- classes/: Class creation, join codes and enrollment
- points/: Predictions and scoring
"""
