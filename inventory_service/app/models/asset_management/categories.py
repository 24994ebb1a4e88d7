# app/models/asset_management/categories.py
from sqlalchemy import Column, Integer, String
from shared.core.database import Base


class HardwareType(Base):
    __tablename__ = "hardware_type"

    type_id = Column(Integer, primary_key=True, autoincrement=True)
    type_name = Column(String(150), nullable=False)


class Department(Base):
    __tablename__ = "department"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(150), nullable=False)


class Building(Base):
    __tablename__ = "building"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(150), nullable=False)


class Section(Base):
    __tablename__ = "sections"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(150), nullable=False)


class Model(Base):
    __tablename__ = "models"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(150), nullable=False)


class Vendor(Base):
    __tablename__ = "vendors"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(150), nullable=False)


class Cadre(Base):
    __tablename__ = "cadres"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(150), nullable=False)


class DispositionStatusCategory(Base):
    __tablename__ = "disposition_status"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False)


class OperationalStatusCategory(Base):
    __tablename__ = "operational_status"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False)


# category key -> (model, id column, value column)
CATEGORY_MODELS = {
    "hardware_type": (HardwareType, HardwareType.type_id, HardwareType.type_name),
    "department": (Department, Department.id, Department.name),
    "building": (Building, Building.id, Building.name),
    "section": (Section, Section.id, Section.name),
    "model": (Model, Model.id, Model.name),
    "vendor": (Vendor, Vendor.id, Vendor.name),
    "cadre": (Cadre, Cadre.id, Cadre.name),
    "disposition_status": (DispositionStatusCategory, DispositionStatusCategory.id, DispositionStatusCategory.name),
    "operational_status": (OperationalStatusCategory, OperationalStatusCategory.id, OperationalStatusCategory.name),
}
