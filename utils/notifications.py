"""
Notifications Module - Telegram alerts for the portfolio owner
"""

import requests
from flask import current_app


TELEGRAM_API_URL = 'https://api.telegram.org/bot{token}/sendMessage'


def get_telegram_credentials():
    """Admin Telegram credentials from config, or None if not configured"""
    token = current_app.config.get('ADMIN_TELEGRAM_BOT_TOKEN')
    chat_id = current_app.config.get('ADMIN_TELEGRAM_CHAT_ID')
    if not token or not chat_id:
        return None
    return {'bot_token': token, 'chat_id': chat_id}


def send_telegram_notification(message):
    """
    Send an HTML-formatted message to the admin's Telegram chat.

    Args:
        message (str): Message body (Telegram HTML subset)

    Returns:
        bool: True if Telegram accepted the message
    """
    credentials = get_telegram_credentials()
    if not credentials:
        current_app.logger.debug("Telegram not configured, skipping notification")
        return False

    try:
        response = requests.post(
            TELEGRAM_API_URL.format(token=credentials['bot_token']),
            json={
                'chat_id': credentials['chat_id'],
                'text': message,
                'parse_mode': 'HTML'
            },
            timeout=10)
        if response.status_code == 200:
            current_app.logger.info("Telegram notification sent")
            return True
        current_app.logger.warning(
            f"Telegram notification failed: {response.status_code} {response.text[:200]}")
        return False
    except requests.RequestException as e:
        current_app.logger.error(f"Error sending Telegram notification: {str(e)}")
        return False


def _escape_html(text):
    return (text or '').replace('&', '&amp;').replace('<', '&lt;').replace('>', '&gt;')


def notify_new_contact(contact):
    """Alert the portfolio owner about a new contact form submission"""
    body = contact.message
    preview = body[:200] + ('...' if len(body) > 200 else '')
    return send_telegram_notification(
        f"📧 <b>New Portfolio Message</b>\n\n"
        f"👤 <b>From:</b> {_escape_html(contact.name)}\n"
        f"📧 <b>Email:</b> {_escape_html(contact.email)}\n"
        f"📝 <b>Subject:</b> {_escape_html(contact.subject)}\n"
        f"💬 <b>Message:</b>\n{_escape_html(preview)}\n\n"
        f"🆔 {contact.id}")
