from extensions import db


class Employee(db.Model):
    __tablename__ = 'employees'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(255), nullable=False)
    position = db.Column(db.String(100))
    department = db.Column(db.String(100))
    join_date = db.Column(db.Date)
    salary = db.Column(db.Float)
    status = db.Column(db.String(16), nullable=False, default='ACTIVE')

    def __repr__(self):
        return f'<Employee {self.name}>'

    def as_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "position": self.position,
            "department": self.department,
            "join_date": self.join_date.isoformat() if self.join_date else None,
            "salary": self.salary,
            "status": self.status,
        }
