"""
Model para armazenar os relatórios gerados pela análise por IA.
"""
from datetime import datetime
from sqlalchemy import Column, Integer, String, DateTime, Text, JSON, ForeignKey

from app.database import Base


class Analysis(Base):
    """
    Representa um relatório de análise de um dataset.

    O conteúdo (título, resumo, lista de insights etc.) é armazenado como
    JSON e editado no lugar quando insights são alterados ou removidos.
    """
    __tablename__ = "ai_analyses"

    id = Column(Integer, primary_key=True, index=True)

    dataset_id = Column(Integer, ForeignKey("datasets.id"), nullable=False, index=True)

    title = Column(String(255), nullable=True)
    content = Column(JSON, nullable=False)
    custom_prompt = Column(Text, nullable=True)
    status = Column(String(20), nullable=False, default="completed")

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
