# app/models/asset_management/assets.py
from sqlalchemy import Column, Date, Integer, String
from sqlalchemy.orm import relationship
from shared.core.database import Base


class Asset(Base):
    __tablename__ = "assets"

    id = Column(Integer, primary_key=True, autoincrement=True)
    asset_id = Column(String(100), nullable=False, index=True)
    serial_number = Column(String(100), nullable=False, index=True)
    hardware_type = Column(String(100), nullable=False)
    model_number = Column(String(100))
    vendor = Column(String(150))

    # current assignment
    owner_fullname = Column(String(200), nullable=False)
    hostname = Column(String(150))
    p_number = Column(String(50))
    cadre = Column(String(100))
    department = Column(String(150))
    section = Column(String(150))
    building = Column(String(150))

    # procurement
    po_number = Column(String(100))
    po_date = Column(Date)
    dc_number = Column(String(100))
    dc_date = Column(Date)
    assigned_date = Column(Date)

    # lifecycle
    replacement_due_period = Column(String(50))
    replacement_due_date = Column(Date, index=True)
    operational_status = Column(String(50))
    disposition_status = Column(String(50))

    transfers = relationship(
        "AssetTransfer", back_populates="asset", passive_deletes="all")
