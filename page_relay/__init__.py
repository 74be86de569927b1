"""
Page Relay: Facebook Messenger webhook relay backed by Google Gemini.
"""
