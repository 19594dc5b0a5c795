"""
Model para armazenar informações dos datasets uploadados.
"""
from datetime import datetime
from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.orm import relationship

from app.database import Base

STATUS_COMPLETED = "completed"


class Dataset(Base):
    """
    Representa um arquivo ingerido na plataforma.

    Armazena os metadados do arquivo original. As colunas inferidas e as
    linhas de dados ficam em tabelas próprias, ligadas por dataset_id.
    """
    __tablename__ = "datasets"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    original_filename = Column(String(255), nullable=False)
    file_type = Column(String(10), nullable=False)

    row_count = Column(Integer, nullable=False)
    column_count = Column(Integer, nullable=False)
    file_size = Column(Integer, nullable=True)

    status = Column(String(20), nullable=False, default=STATUS_COMPLETED, index=True)

    created_at = Column(DateTime, default=datetime.utcnow)

    columns = relationship(
        "DatasetColumn",
        back_populates="dataset",
        order_by="DatasetColumn.id",
        passive_deletes=True
    )
