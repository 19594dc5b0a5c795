"""
Model para armazenar o schema inferido de cada coluna.
"""
from sqlalchemy import Column, Integer, String, Boolean, ForeignKey
from sqlalchemy.orm import relationship

from app.database import Base


class DatasetColumn(Base):
    """
    Representa uma coluna de um dataset com o tipo inferido.

    column_type é um de: string, number, date, boolean.
    """
    __tablename__ = "dataset_columns"

    id = Column(Integer, primary_key=True, index=True)

    dataset_id = Column(Integer, ForeignKey("datasets.id"), nullable=False, index=True)
    dataset = relationship("Dataset", back_populates="columns")

    column_name = Column(String(255), nullable=False)
    column_type = Column(String(20), nullable=False)
    is_filterable = Column(Boolean, default=False)
    unique_values_count = Column(Integer, nullable=False)
