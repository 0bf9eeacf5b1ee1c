"""Client CRUD and pull history endpoints."""

from fastapi import APIRouter, Depends, HTTPException, status

from client_roster.application.schemas import (
    ClientCreate,
    ClientCreatedResponse,
    ClientResponse,
    ClientUpdate,
    MessageResponse,
    PullHistoryCreate,
    PullHistoryResponse,
)
from client_roster.application.services import ClientService
from client_roster.domain.entities import Client
from client_roster.domain.exceptions import EntityNotFoundError
from client_roster.infrastructure.dependencies import get_client_service

router = APIRouter(prefix="/clients", tags=["Clients"])


def _to_response(client: Client, service: ClientService) -> ClientResponse:
    response = ClientResponse.model_validate(client, from_attributes=True)
    response.original_password = service.reveal_password(client)
    return response


@router.get("", response_model=list[ClientResponse])
async def list_clients(
    service: ClientService = Depends(get_client_service),
) -> list[ClientResponse]:
    """Retrieve every client, ordered by name."""
    clients = await service.list_clients()
    return [_to_response(c, service) for c in clients]


@router.post("", response_model=ClientCreatedResponse, status_code=status.HTTP_201_CREATED)
async def create_client(
    data: ClientCreate,
    service: ClientService = Depends(get_client_service),
) -> ClientCreatedResponse:
    """Create a new client. Both credential fields are derived from ``password``."""
    client = await service.create_client(data)
    return ClientCreatedResponse(id=client.id, message="Client added successfully")


@router.put("/{client_pk}", response_model=MessageResponse)
async def update_client(
    client_pk: int,
    data: ClientUpdate,
    service: ClientService = Depends(get_client_service),
) -> MessageResponse:
    """Partially update a client; credentials change only when a password is sent."""
    try:
        await service.update_client(client_pk, data)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return MessageResponse(message="Client updated successfully")


@router.delete("/{client_pk}", response_model=MessageResponse)
async def delete_client(
    client_pk: int,
    service: ClientService = Depends(get_client_service),
) -> MessageResponse:
    """Delete a client together with its pull history."""
    try:
        await service.delete_client(client_pk)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return MessageResponse(message="Client deleted successfully")


@router.get("/{client_pk}/details", response_model=ClientResponse)
async def get_client_details(
    client_pk: int,
    service: ClientService = Depends(get_client_service),
) -> ClientResponse:
    """Retrieve a single client by ID."""
    try:
        client = await service.get_client(client_pk)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return _to_response(client, service)


@router.get("/{client_pk}/history", response_model=list[PullHistoryResponse])
async def list_pull_history(
    client_pk: int,
    service: ClientService = Depends(get_client_service),
) -> list[PullHistoryResponse]:
    """Pull history for a client, newest ``pull_date`` first."""
    entries = await service.list_history(client_pk)
    return [PullHistoryResponse.model_validate(e, from_attributes=True) for e in entries]


@router.post(
    "/{client_pk}/history",
    response_model=MessageResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_pull_history(
    client_pk: int,
    data: PullHistoryCreate,
    service: ClientService = Depends(get_client_service),
) -> MessageResponse:
    """Record a pull and copy it onto the client's latest-pull fields."""
    try:
        await service.record_pull(client_pk, data)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return MessageResponse(message="Pull history added successfully")
