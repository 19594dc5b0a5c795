"""
Rota de upload de arquivos.
"""
import zipfile
from pathlib import Path

import pandas as pd
from fastapi import APIRouter, Depends, HTTPException, UploadFile, File
from sqlalchemy.orm import Session

from app.config import ALLOWED_EXTENSIONS, MAX_FILE_SIZE_MB
from app.database import get_db
from app.exceptions import EmptyDatasetError, PartialWriteError, StoreError, UnsupportedFormatError
from app.schemas.dataset import UploadResponse
from app.services.file_processor import FileDescriptor, FileProcessingService

router = APIRouter(prefix="/api/upload", tags=["upload"])


@router.post("", response_model=UploadResponse)
async def upload_file(file: UploadFile = File(...), db: Session = Depends(get_db)):
    """
    Faz upload de um arquivo (CSV ou Excel) e cria o dataset.

    Parâmetros:
        file: Arquivo CSV, XLSX ou XLS.

    Retorna:
        ID do dataset criado e resumo das colunas inferidas.
    """
    # Valida extensão antes de ler o conteúdo
    file_ext = Path(file.filename or "").suffix.lower()
    if file_ext not in ALLOWED_EXTENSIONS:
        raise HTTPException(
            status_code=400,
            detail=f"Formato não suportado. Use: {', '.join(sorted(ALLOWED_EXTENSIONS))}"
        )

    content = await file.read()
    if len(content) > MAX_FILE_SIZE_MB * 1024 * 1024:
        raise HTTPException(
            status_code=400,
            detail=f"Arquivo muito grande. Tamanho máximo: {MAX_FILE_SIZE_MB}MB"
        )

    processor = FileProcessingService(db)
    try:
        result = processor.process_file(
            FileDescriptor(original_filename=file.filename, size=len(content), source=content)
        )
    except (UnsupportedFormatError, EmptyDatasetError) as e:
        raise HTTPException(status_code=400, detail=str(e))
    except (PartialWriteError, StoreError) as e:
        raise HTTPException(status_code=500, detail=f"Erro ao processar arquivo: {str(e)}")
    except (pd.errors.ParserError, UnicodeDecodeError, zipfile.BadZipFile, ValueError) as e:
        # Erros de leitura do pandas/openpyxl (arquivo corrompido, encoding etc.)
        raise HTTPException(status_code=400, detail=f"Erro ao ler arquivo: {str(e)}")

    return {
        "message": "Arquivo processado com sucesso",
        "dataset_id": result["dataset_id"],
        "summary": result["summary"]
    }
