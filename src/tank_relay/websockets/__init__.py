"""
WebSocket transport for the Tank Relay server.
"""
