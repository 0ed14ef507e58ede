# Staff accounts
from enum import Enum
from datetime import datetime
from rentalps import db
from rentalps.utils.security import hash_password, verify_password


class UserRole(Enum):
    """Staff roles"""
    OWNER = ('owner', 'Owner')
    STAFF = ('staff', 'Staff')

    def __init__(self, code, name):
        self.code = code
        self.display_name = name

    @classmethod
    def codes(cls):
        return [role.code for role in cls]


class User(db.Model):
    __tablename__ = 'user'

    id = db.Column('id_user', db.Integer, primary_key=True)
    username = db.Column(db.String(50), nullable=False, index=True)
    email = db.Column(db.String(100), unique=True, nullable=True)
    password_hash = db.Column(db.String(255), nullable=False)
    role = db.Column(db.String(20), nullable=False, default='staff')

    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    def set_password(self, password):
        self.password_hash = hash_password(password)

    def check_password(self, password):
        return verify_password(password, self.password_hash)

    def is_owner(self):
        return self.role == UserRole.OWNER.code

    def get_role_display(self):
        for role in UserRole:
            if role.code == self.role:
                return role.display_name
        return self.role

    def token_payload(self):
        return {'user_id': self.id, 'username': self.username, 'role': self.role}

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.username,
            'email': self.email,
            'role': self.role,
        }

    def to_profile(self):
        return {
            'id_user': self.id,
            'username': self.username,
            'email': self.email,
            'role': self.role,
            'created_at': self.created_at.isoformat() if self.created_at else None,
        }

    def __repr__(self):
        return f'<User {self.id}: {self.username} ({self.get_role_display()})>'
