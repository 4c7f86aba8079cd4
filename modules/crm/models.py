from extensions import db


class Lead(db.Model):
    __tablename__ = 'leads'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(255), nullable=False)
    company = db.Column(db.String(255))
    status = db.Column(db.String(16), nullable=False, default='NEW')  # NEW, CONTACTED, QUALIFIED, PROPOSAL, WON, LOST
    value = db.Column(db.Float)
    last_follow_up = db.Column(db.Date)

    def as_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "company": self.company,
            "status": self.status,
            "value": self.value,
            "last_follow_up": self.last_follow_up.isoformat() if self.last_follow_up else None,
        }
