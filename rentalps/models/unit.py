from rentalps import db
from sqlalchemy.orm import relationship


# physical station (console) placed in a room
class Unit(db.Model):

    __tablename__ = 'unit'

    id = db.Column('id_unit', db.Integer, primary_key=True)
    name = db.Column('nama_unit', db.String(100), nullable=False)
    room_id = db.Column('id_room', db.Integer, db.ForeignKey('room.id_room'), nullable=False, index=True)
    description = db.Column('deskripsi', db.Text, nullable=True)

    room = relationship('Room', back_populates='units')
    installed_games = relationship('UnitGame', back_populates='unit', cascade='all, delete-orphan')

    def to_dict(self, with_room=False) -> dict:
        data = {
            'id_unit': self.id,
            'nama_unit': self.name,
            'id_room': self.room_id,
            'deskripsi': self.description,
        }
        if with_room:
            data['room'] = self.room.to_dict() if self.room else None
            data['installed_games_count'] = len(self.installed_games)
        return data

    def __repr__(self):
        return f'<Unit {self.id}: {self.name}>'


# game catalog entry
class GameList(db.Model):

    __tablename__ = 'game_list'

    id = db.Column('id_game', db.Integer, primary_key=True)
    name = db.Column('nama_game', db.String(150), nullable=False, index=True)

    installs = relationship('UnitGame', back_populates='game', cascade='all, delete-orphan')

    def to_dict(self) -> dict:
        return {
            'id_game': self.id,
            'nama_game': self.name,
            'units_installed': len(self.installs),
        }


# installation of a game on a unit (many-to-many join)
class UnitGame(db.Model):

    __tablename__ = 'unit_game'
    __table_args__ = (db.UniqueConstraint('id_unit', 'id_game', name='uq_unit_game'),)

    id = db.Column('id_install', db.Integer, primary_key=True)
    unit_id = db.Column('id_unit', db.Integer, db.ForeignKey('unit.id_unit', ondelete='CASCADE'), nullable=False)
    game_id = db.Column('id_game', db.Integer, db.ForeignKey('game_list.id_game', ondelete='CASCADE'), nullable=False)

    unit = relationship('Unit', back_populates='installed_games')
    game = relationship('GameList', back_populates='installs')

    def to_dict(self) -> dict:
        return {
            'id_install': self.id,
            'id_unit': self.unit_id,
            'id_game': self.game_id,
            'game': {'id_game': self.game.id, 'nama_game': self.game.name} if self.game else None,
        }
