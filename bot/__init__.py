"""
Discord client, configuration and startup for the music bot.
"""
