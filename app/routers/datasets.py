"""
Rotas para consulta e exclusão de datasets.
"""
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from app.config import DEFAULT_PAGE_SIZE
from app.database import get_db
from app.exceptions import NotFoundError, StoreError
from app.schemas.dataset import DatasetDataResponse, DatasetDetailResponse, DatasetResponse
from app.services.dataset_store import DatasetStore

router = APIRouter(prefix="/api/data", tags=["datasets"])


@router.get("", response_model=list[DatasetResponse])
def list_datasets(db: Session = Depends(get_db)):
    """
    Lista todos os datasets concluídos.

    Retorna:
        Lista de datasets, do mais recente para o mais antigo.
    """
    try:
        return DatasetStore(db).list_datasets()
    except StoreError:
        raise HTTPException(status_code=500, detail="Erro ao buscar datasets")


@router.get("/{dataset_id}", response_model=DatasetDetailResponse)
def get_dataset(dataset_id: int, db: Session = Depends(get_db)):
    """
    Obtém os detalhes de um dataset.

    Parâmetros:
        dataset_id: ID do dataset.

    Retorna:
        Informações do dataset e suas colunas.
    """
    try:
        return DatasetStore(db).get_dataset(dataset_id)
    except NotFoundError:
        raise HTTPException(status_code=404, detail="Dataset não encontrado")


@router.get("/{dataset_id}/data", response_model=DatasetDataResponse)
def get_dataset_data(
    dataset_id: int,
    page: int = 1,
    limit: int = DEFAULT_PAGE_SIZE,
    db: Session = Depends(get_db)
):
    """
    Obtém as linhas de um dataset com paginação.

    Parâmetros:
        dataset_id: ID do dataset.
        page: Página (começa em 1).
        limit: Quantidade de linhas por página.

    Retorna:
        Linhas da página e metadados de paginação.
    """
    store = DatasetStore(db)
    try:
        store.get_dataset(dataset_id)
        return store.get_rows_page(dataset_id, page, limit)
    except NotFoundError:
        raise HTTPException(status_code=404, detail="Dataset não encontrado")


@router.delete("/{dataset_id}")
def delete_dataset(dataset_id: int, db: Session = Depends(get_db)):
    """
    Exclui um dataset com suas colunas, linhas e análises.

    Parâmetros:
        dataset_id: ID do dataset a ser excluído.
    """
    try:
        DatasetStore(db).delete_dataset(dataset_id)
    except NotFoundError:
        raise HTTPException(status_code=404, detail="Dataset não encontrado")
    except StoreError as e:
        raise HTTPException(status_code=500, detail=f"Erro ao excluir dataset: {str(e)}")

    return {"message": "Dataset excluído com sucesso"}
