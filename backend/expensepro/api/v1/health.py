from fastapi import APIRouter, Depends
from expensepro.api.v1.deps import get_store
from expensepro.db.store import RecordStore
from expensepro.schemas.simple import Health

router = APIRouter()


@router.get('/health', response_model=Health)
def health(store: RecordStore = Depends(get_store)):
    return {'status': 'ok', 'schema_version': store.schema_version}
