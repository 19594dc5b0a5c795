"""
Migração para adicionar o índice de ordenação das linhas à tabela dataset_rows.

Execute este módulo na raiz do projeto para atualizar um banco de dados existente:
    python -m migrations.add_row_index

O banco é o mesmo configurado em DATABASE_URL (app.config).
"""
import sqlite3
from pathlib import Path

from sqlalchemy.engine import make_url

from app.config import DATABASE_URL

INDEX_NAME = "ix_dataset_rows_dataset_id_row_index"


def database_path(url: str = DATABASE_URL) -> Path | None:
    """
    Retorna o caminho do arquivo sqlite da URL, ou None quando a URL não
    aponta para um arquivo sqlite (outro banco ou sqlite em memória).
    """
    parsed = make_url(url)
    if parsed.get_backend_name() != "sqlite" or not parsed.database or parsed.database == ":memory:":
        return None
    return Path(parsed.database)


def migrate(url: str = DATABASE_URL):
    """
    Cria o índice composto (dataset_id, row_index) usado nas leituras
    ordenadas e na paginação.
    """
    path = database_path(url)
    if path is None:
        print(f"DATABASE_URL não aponta para um arquivo sqlite: {url}")
        return

    if not path.exists():
        print("Banco de dados não encontrado. Será criado automaticamente ao iniciar a aplicação.")
        return

    conn = sqlite3.connect(path)
    cursor = conn.cursor()

    # Verifica se o índice já existe
    cursor.execute("PRAGMA index_list(dataset_rows)")
    indexes = [index[1] for index in cursor.fetchall()]

    if INDEX_NAME not in indexes:
        print(f"Criando índice '{INDEX_NAME}'...")
        cursor.execute(
            f"CREATE INDEX {INDEX_NAME} ON dataset_rows (dataset_id, row_index)"
        )
    else:
        print(f"Índice '{INDEX_NAME}' já existe.")

    conn.commit()
    conn.close()
    print("Migração concluída com sucesso!")


if __name__ == "__main__":
    migrate()
