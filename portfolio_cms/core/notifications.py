from flask import flash


class Notifications:
    """Collects (category, message) pairs until the caller presents them"""

    def __init__(self):
        self.messages = []

    def success(self, message):
        self.messages.append(('success', message))

    def error(self, message):
        self.messages.append(('error', message))

    def drain(self):
        messages, self.messages = self.messages, []
        return messages

    def flash_all(self):
        """Present pending messages as flashed notifications"""
        messages = self.drain()
        for category, message in messages:
            flash(message, category)
        return messages

    def as_json(self):
        return [{'category': category, 'message': message}
                for category, message in self.drain()]
