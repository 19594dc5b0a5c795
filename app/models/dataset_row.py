"""
Model para armazenar as linhas de dados de um dataset.
"""
from sqlalchemy import Column, Integer, ForeignKey, JSON, Index

from app.database import Base


class DatasetRow(Base):
    """
    Representa uma linha limpa do arquivo original.

    row_index preserva a ordem do arquivo (0..row_count-1).
    """
    __tablename__ = "dataset_rows"
    __table_args__ = (
        Index("ix_dataset_rows_dataset_id_row_index", "dataset_id", "row_index"),
    )

    id = Column(Integer, primary_key=True, index=True)

    dataset_id = Column(Integer, ForeignKey("datasets.id"), nullable=False, index=True)
    row_index = Column(Integer, nullable=False)

    # Mapeamento coluna -> valor escalar
    row_data = Column(JSON, nullable=False)
