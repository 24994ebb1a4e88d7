# app/models/asset_management/asset_transfers.py
from sqlalchemy import TIMESTAMP, Column, ForeignKey, Integer, String, Text, event
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from shared.core.database import Base
from shared.core.exceptions import ImmutableRecordError


class AssetTransfer(Base):
    __tablename__ = "asset_transfers"

    id = Column(Integer, primary_key=True, autoincrement=True)
    asset_id = Column(Integer, ForeignKey("assets.id"),
                      nullable=False, index=True)
    asset_serial_number = Column(String(100))

    previous_owner_fullname = Column(String(200))
    previous_hostname = Column(String(150))
    previous_p_number = Column(String(50))
    previous_cadre = Column(String(100))
    previous_department = Column(String(150))
    previous_section = Column(String(150))
    previous_building = Column(String(150))

    new_owner_fullname = Column(String(200), nullable=False)
    new_hostname = Column(String(150))
    new_p_number = Column(String(50))
    new_cadre = Column(String(100))
    new_department = Column(String(150))
    new_section = Column(String(150))
    new_building = Column(String(150))

    transfer_reason = Column(Text)
    transfer_date = Column(TIMESTAMP(timezone=True),
                           server_default=func.now(), nullable=False)
    transferred_by = Column(String(200))
    transferred_by_user_id = Column(Integer, ForeignKey(
        "user.id", ondelete="SET NULL"), nullable=True)

    asset = relationship("Asset", back_populates="transfers")


# Ledger rows are written once and never touched again
@event.listens_for(AssetTransfer, "before_update")
def _block_transfer_update(mapper, connection, target):
    raise ImmutableRecordError(
        "AssetTransfer", target.id, "transfer records cannot be modified")


@event.listens_for(AssetTransfer, "before_delete")
def _block_transfer_delete(mapper, connection, target):
    raise ImmutableRecordError(
        "AssetTransfer", target.id, "transfer records cannot be deleted")
