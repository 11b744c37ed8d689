from flask_mail import Message
from extensions import mail


def send_email(to, subject, body, html=None):
    msg = Message(subject, recipients=[to], body=body, html=html)
    mail.send(msg)
