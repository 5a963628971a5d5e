import logging
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated
from organizer.core.context import get_request_context
from organizer.core.permissions import get_owned_or_none
from organizer.core.services import filter_owned, owned_queryset, create_owned, update_owned, remove_owned
from .filters import ProjectFilter
from .models import Project, Context
from .serializers import ProjectSerializer, ContextSerializer

logger = logging.getLogger('organizer.organization')


# Project views
@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def project_list_create(request):
    """List the caller's projects (newest first) or create one"""
    ctx = get_request_context(request)

    if request.method == 'GET':
        projects = filter_owned(Project, ctx, ProjectFilter, request.query_params)
        serializer = ProjectSerializer(projects, many=True)
        return Response(serializer.data)

    logger.info(f"User {ctx.user_id} creating project with data: {request.data}")
    project = create_owned(ProjectSerializer(data=request.data), ctx)
    return Response({'id': project.pk}, status=status.HTTP_201_CREATED)


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@permission_classes([IsAuthenticated])
def project_detail(request, pk):
    """Retrieve, patch or delete one of the caller's projects"""
    ctx = get_request_context(request)

    if request.method == 'GET':
        project = get_owned_or_none(Project, ctx, pk)
        if project is None:
            return Response({'error': 'Project not found'}, status=status.HTTP_404_NOT_FOUND)
        return Response(ProjectSerializer(project).data)

    if request.method == 'DELETE':
        remove_owned(Project, ctx, pk, entity='Project')
        return Response(status=status.HTTP_204_NO_CONTENT)

    project = update_owned(Project, ctx, pk, ProjectSerializer, request.data, entity='Project')
    logger.info(f"Project {pk} updated by user {ctx.user_id}")
    return Response(ProjectSerializer(project).data)


# Context views
@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def context_list_create(request):
    """List the caller's contexts or create one"""
    ctx = get_request_context(request)

    if request.method == 'GET':
        serializer = ContextSerializer(owned_queryset(Context, ctx), many=True)
        return Response(serializer.data)

    context_obj = create_owned(ContextSerializer(data=request.data), ctx)
    return Response({'id': context_obj.pk}, status=status.HTTP_201_CREATED)


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@permission_classes([IsAuthenticated])
def context_detail(request, pk):
    """Retrieve, patch or delete one of the caller's contexts"""
    ctx = get_request_context(request)

    if request.method == 'GET':
        context_obj = get_owned_or_none(Context, ctx, pk)
        if context_obj is None:
            return Response({'error': 'Context not found'}, status=status.HTTP_404_NOT_FOUND)
        return Response(ContextSerializer(context_obj).data)
    elif request.method == 'DELETE':
        remove_owned(Context, ctx, pk, entity='Context')
        return Response(status=status.HTTP_204_NO_CONTENT)
    else:
        context_obj = update_owned(Context, ctx, pk, ContextSerializer, request.data, entity='Context')
        return Response(ContextSerializer(context_obj).data)
