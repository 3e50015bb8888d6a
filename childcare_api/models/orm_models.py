"""
ORM models for database tables.
"""
from sqlalchemy import Column, Integer, String, DateTime, Date, ForeignKey, Text, Boolean, Numeric, UniqueConstraint, Index, text
from sqlalchemy import orm
from sqlalchemy.orm import declarative_base
from datetime import datetime

Base = declarative_base()


def unique_when_set(name, column):
    """Unique index over the rows where the column is not NULL."""
    condition = text(f"{column} IS NOT NULL")
    return Index(name, column, unique=True, postgresql_where=condition, sqlite_where=condition)


class Child(Base):
    __tablename__ = "children"
    __table_args__ = (
        unique_when_set("uq_child_email", "email"),
        unique_when_set("uq_child_phone", "phone"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    gender = Column(String(10), nullable=False, default="")
    last_name = Column(String(100), nullable=True)
    first_name = Column(String(100), nullable=True)
    birth_date = Column(Date, nullable=True)
    birth_city = Column(String(100), nullable=True)
    has_siblings = Column(Boolean, nullable=True, default=False)
    phone = Column(String(20), nullable=True)
    email = Column(String(255), nullable=True)
    created_utc = Column(DateTime, default=datetime.utcnow)
    updated_utc = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    additional_data = orm.relationship("AdditionalData", back_populates="child", cascade="all, delete-orphan", passive_deletes=True)
    guardian_children = orm.relationship("GuardianChild", back_populates="child", passive_deletes="all")
    authorized_person_children = orm.relationship("AuthorizedPersonChild", back_populates="child", passive_deletes="all")

    @property
    def guardians(self):
        return [link.guardian for link in self.guardian_children]

    @property
    def authorized_people(self):
        return [link.authorized_person for link in self.authorized_person_children]

    def __repr__(self):
        return f"<Child(id={self.id}, last_name={self.last_name}, first_name={self.first_name})>"


class Guardian(Base):
    __tablename__ = "guardians"
    __table_args__ = (
        unique_when_set("uq_guardian_beneficiary_number", "beneficiary_number"),
        unique_when_set("uq_guardian_phone2", "phone2"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(10), nullable=False, default="")
    last_name = Column(String(100), nullable=True)
    birth_name = Column(String(100), nullable=True)
    first_name = Column(String(100), nullable=True)
    address = Column(String(255), nullable=True)
    postal_code = Column(String(10), nullable=True)
    city = Column(String(100), nullable=True)
    email = Column(String(255), nullable=True)
    phone = Column(String(20), nullable=True)
    phone2 = Column(String(20), nullable=True)
    beneficiary_number = Column(String(50), nullable=True)
    created_utc = Column(DateTime, default=datetime.utcnow)
    updated_utc = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    financial_information = orm.relationship("FinancialInformation", back_populates="guardian", uselist=False, cascade="all, delete-orphan", passive_deletes=True)
    personal_situation = orm.relationship("PersonalSituation", back_populates="guardian", uselist=False, cascade="all, delete-orphan", passive_deletes=True)
    guardian_children = orm.relationship("GuardianChild", back_populates="guardian", passive_deletes="all")

    @property
    def children(self):
        return [link.child for link in self.guardian_children]

    def __repr__(self):
        return f"<Guardian(id={self.id}, last_name={self.last_name}, first_name={self.first_name})>"


class AuthorizedPerson(Base):
    __tablename__ = "authorized_people"

    id = Column(Integer, primary_key=True, autoincrement=True)
    last_name = Column(String(100), nullable=True)
    first_name = Column(String(100), nullable=True)
    phone = Column(String(20), nullable=True)
    created_utc = Column(DateTime, default=datetime.utcnow)
    updated_utc = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    authorized_person_children = orm.relationship("AuthorizedPersonChild", back_populates="authorized_person", passive_deletes="all")

    @property
    def children(self):
        return [link.child for link in self.authorized_person_children]

    def __repr__(self):
        return f"<AuthorizedPerson(id={self.id}, last_name={self.last_name}, first_name={self.first_name})>"


class FinancialInformation(Base):
    __tablename__ = "financial_informations"

    id = Column(Integer, primary_key=True, autoincrement=True)
    guardian_id = Column(Integer, ForeignKey("guardians.id", ondelete="CASCADE"), nullable=False, unique=True, index=True)
    family_quotient = Column(Integer, nullable=True)
    monthly_income = Column(Numeric(10, 2), nullable=True)
    annual_income = Column(Numeric(12, 2), nullable=True)
    model = Column(String(50), nullable=True)
    start_date = Column(Date, nullable=True)
    end_date = Column(Date, nullable=True)
    created_utc = Column(DateTime, default=datetime.utcnow)
    updated_utc = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    guardian = orm.relationship("Guardian", back_populates="financial_information")


class PersonalSituation(Base):
    __tablename__ = "personal_situations"

    id = Column(Integer, primary_key=True, autoincrement=True)
    guardian_id = Column(Integer, ForeignKey("guardians.id", ondelete="CASCADE"), nullable=False, unique=True, index=True)
    marital_status = Column(String(50), nullable=True)
    sector = Column(String(100), nullable=True)
    area = Column(String(100), nullable=True)
    regime = Column(String(100), nullable=True)
    created_utc = Column(DateTime, default=datetime.utcnow)
    updated_utc = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    guardian = orm.relationship("Guardian", back_populates="personal_situation")


class AdditionalData(Base):
    __tablename__ = "additional_data"

    id = Column(Integer, primary_key=True, autoincrement=True)
    child_id = Column(Integer, ForeignKey("children.id", ondelete="CASCADE"), nullable=False, index=True)
    param_name = Column(String(100), nullable=True)
    param_value = Column(Text, nullable=True)
    param_type = Column(String(50), nullable=True)
    comment = Column(Text, nullable=True)
    created_utc = Column(DateTime, default=datetime.utcnow)
    updated_utc = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    child = orm.relationship("Child", back_populates="additional_data")


class GuardianChild(Base):
    __tablename__ = "guardian_children"
    __table_args__ = (
        UniqueConstraint("guardian_id", "child_id", name="uq_guardian_child"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    guardian_id = Column(Integer, ForeignKey("guardians.id"), nullable=False, index=True)
    child_id = Column(Integer, ForeignKey("children.id"), nullable=False, index=True)
    relationship = Column(String(50), nullable=True)
    created_utc = Column(DateTime, default=datetime.utcnow)
    updated_utc = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    guardian = orm.relationship("Guardian", back_populates="guardian_children")
    child = orm.relationship("Child", back_populates="guardian_children")

    def __repr__(self):
        return f"<GuardianChild(guardian_id={self.guardian_id}, child_id={self.child_id}, relationship={self.relationship})>"


class AuthorizedPersonChild(Base):
    __tablename__ = "authorized_person_children"
    __table_args__ = (
        UniqueConstraint("authorized_person_id", "child_id", name="uq_authorized_person_child"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    authorized_person_id = Column(Integer, ForeignKey("authorized_people.id"), nullable=False, index=True)
    child_id = Column(Integer, ForeignKey("children.id"), nullable=False, index=True)
    relationship = Column(String(50), nullable=True)
    emergency_contact = Column(Boolean, nullable=False, default=False)
    comment = Column(Text, nullable=True)
    created_utc = Column(DateTime, default=datetime.utcnow)
    updated_utc = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    authorized_person = orm.relationship("AuthorizedPerson", back_populates="authorized_person_children")
    child = orm.relationship("Child", back_populates="authorized_person_children")

    def __repr__(self):
        return f"<AuthorizedPersonChild(authorized_person_id={self.authorized_person_id}, child_id={self.child_id})>"
